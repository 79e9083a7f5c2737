from .errors import ErrUpstreamUnavailable
from .interface import IContentProxy
from .type import Config, FetchInput
from .usecase.helpers import create_url, propagate_status_code
from .usecase.new import New as NewContentProxy

__all__ = [
    "ErrUpstreamUnavailable",
    "IContentProxy",
    "Config",
    "FetchInput",
    "create_url",
    "propagate_status_code",
    "NewContentProxy",
]
