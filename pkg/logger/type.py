from dataclasses import dataclass
from .constant import (
    DEFAULT_COLORIZE,
    DEFAULT_ENABLE_CONSOLE,
    DEFAULT_LEVEL,
    DEFAULT_SERVICE_NAME,
    LogLevel,
)


@dataclass
class LoggerConfig:
    """Logger configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Enable console output
        colorize: Enable colored console output
        service_name: Service name stamped on every record
    """

    level: LogLevel = DEFAULT_LEVEL
    enable_console: bool = DEFAULT_ENABLE_CONSOLE
    colorize: bool = DEFAULT_COLORIZE
    service_name: str = DEFAULT_SERVICE_NAME

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.level, str) and not isinstance(self.level, LogLevel):
            name = self.level.upper()
            if name == "WARN":
                name = "WARNING"
            try:
                self.level = LogLevel(name)
            except ValueError:
                valid_levels = [l.value for l in LogLevel]
                raise ValueError(
                    f"Invalid log level: {self.level}. Must be one of {valid_levels}"
                )
