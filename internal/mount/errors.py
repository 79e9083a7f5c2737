class ErrInvalidMountConfig(Exception):
    """Raised when fstab.yaml cannot be parsed into mount points."""

    pass


__all__ = ["ErrInvalidMountConfig"]
