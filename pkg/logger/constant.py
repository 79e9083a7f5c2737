from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


DEFAULT_SERVICE_NAME = "content-bus"
DEFAULT_LEVEL = LogLevel.INFO
DEFAULT_ENABLE_CONSOLE = True
DEFAULT_COLORIZE = False

LOG_FORMAT_TIME = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>"
LOG_FORMAT_LEVEL = "<level>{level: <7}</level>"
LOG_FORMAT_SERVICE = "{extra[service]}"
LOG_FORMAT_TRACE = "<cyan>{extra[trace_id]}</cyan>"
LOG_FORMAT_MESSAGE = "<level>{message}</level>"

TRACE_ID_KEY = "trace_id"
REQUEST_ID_KEY = "request_id"
SERVICE_KEY = "service"
