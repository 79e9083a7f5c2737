"""Module-specific errors for the content bus handler."""


class ErrInvalidRequest(Exception):
    """Raised when required request parameters are missing."""

    pass


class ErrMountNotFound(Exception):
    """Raised when no fstab.yaml exists or no mount covers the path."""

    pass


__all__ = [
    "ErrInvalidRequest",
    "ErrMountNotFound",
]
