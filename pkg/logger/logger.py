import sys
from typing import Optional, Iterator, Protocol, runtime_checkable
from contextvars import ContextVar
from contextlib import contextmanager
from loguru import logger as _loguru_logger  # type: ignore

from .constant import (
    LOG_FORMAT_LEVEL,
    LOG_FORMAT_MESSAGE,
    LOG_FORMAT_SERVICE,
    LOG_FORMAT_TIME,
    LOG_FORMAT_TRACE,
    REQUEST_ID_KEY,
    SERVICE_KEY,
    TRACE_ID_KEY,
)
from .type import LoggerConfig

# Per-invocation identifiers (async-safe)
_trace_id_var: ContextVar[Optional[str]] = ContextVar(TRACE_ID_KEY, default=None)
_request_id_var: ContextVar[Optional[str]] = ContextVar(REQUEST_ID_KEY, default=None)


@runtime_checkable
class ILogger(Protocol):
    """Protocol defining the Logger interface."""

    def trace_context(
        self, trace_id: Optional[str] = None, request_id: Optional[str] = None
    ) -> Iterator[None]: ...

    def get_request_id(self) -> Optional[str]: ...

    def debug(self, message: str, **kwargs) -> None: ...

    def info(self, message: str, **kwargs) -> None: ...

    def warning(self, message: str, **kwargs) -> None: ...

    def error(self, message: str, **kwargs) -> None: ...

    def exception(self, message: str, **kwargs) -> None: ...


class Logger(ILogger):
    """Loguru wrapper that stamps every record with the invocation's ids.

    Usage:
        logger = Logger(LoggerConfig(level="INFO"))
        with logger.trace_context(request_id="req_123"):
            logger.info("Fetching content")
    """

    def __init__(self, config: LoggerConfig):
        self.config = config
        self._loguru = _loguru_logger.bind(**{SERVICE_KEY: config.service_name})

        # Handlers are process-wide in loguru; start from a clean slate.
        _loguru_logger.remove()
        if self.config.enable_console:
            self._add_console_handler()

    def _add_console_handler(self) -> None:
        def format_record(record):
            trace_id = _trace_id_var.get()
            request_id = _request_id_var.get()
            record["extra"].setdefault(SERVICE_KEY, self.config.service_name)
            record["extra"][TRACE_ID_KEY] = trace_id or request_id or "-"
            if request_id:
                record["extra"][REQUEST_ID_KEY] = request_id
            return True

        format_str = (
            f"{LOG_FORMAT_TIME} | {LOG_FORMAT_LEVEL} | {LOG_FORMAT_SERVICE} | "
            f"{LOG_FORMAT_TRACE} - {LOG_FORMAT_MESSAGE}"
        )

        _loguru_logger.add(
            sys.stdout,
            colorize=self.config.colorize,
            format=format_str,
            level=self.config.level.value,
            filter=format_record,
        )

    @contextmanager
    def trace_context(
        self, trace_id: Optional[str] = None, request_id: Optional[str] = None
    ):
        """Bind trace and request ids for the duration of one invocation."""
        trace_token = _trace_id_var.set(trace_id) if trace_id else None
        request_token = _request_id_var.set(request_id) if request_id else None
        try:
            yield
        finally:
            if request_token is not None:
                _request_id_var.reset(request_token)
            if trace_token is not None:
                _trace_id_var.reset(trace_token)

    def get_request_id(self) -> Optional[str]:
        return _request_id_var.get()

    def debug(self, message: str, **kwargs) -> None:
        self._loguru.debug(message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._loguru.info(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._loguru.warning(message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._loguru.error(message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        self._loguru.exception(message, **kwargs)

    def log(self, level: str, message: str, **kwargs) -> None:
        """Log at a level chosen at runtime (e.g. from a status code)."""
        getattr(self, level)(message, **kwargs)


__all__ = [
    "Logger",
    "ILogger",
    "LoggerConfig",
]
