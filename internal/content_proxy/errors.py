class ErrUpstreamUnavailable(Exception):
    """Raised when the content proxy times out or the connection fails."""

    pass


__all__ = ["ErrUpstreamUnavailable"]
