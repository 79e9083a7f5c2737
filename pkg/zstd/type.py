from dataclasses import dataclass
from .constant import DEFAULT_LEVEL, ERROR_INVALID_LEVEL, ZSTD_LEVEL_MAP


@dataclass
class ZstdConfig:
    """Zstd codec configuration.

    Attributes:
        default_level: Level used when callers do not pass one (0-3)
    """

    default_level: int = DEFAULT_LEVEL

    def __post_init__(self):
        """Validate configuration."""
        if self.default_level not in ZSTD_LEVEL_MAP:
            raise ValueError(ERROR_INVALID_LEVEL.format(level=self.default_level))


__all__ = ["ZstdConfig"]
