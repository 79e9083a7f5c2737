from dataclasses import dataclass
from .constant import DEFAULT_LEVEL, ERROR_INVALID_LEVEL, MAX_LEVEL, MIN_LEVEL


@dataclass
class GzipConfig:
    """Gzip codec configuration.

    Attributes:
        level: zlib compression level (0-9)
    """

    level: int = DEFAULT_LEVEL

    def __post_init__(self):
        """Validate configuration."""
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise ValueError(ERROR_INVALID_LEVEL.format(level=self.level))


__all__ = ["GzipConfig"]
