from .errors import ErrInvalidRequest, ErrMountNotFound
from .interface import IContentBus
from .type import Config, HandlerRequest, Params, StorageFactory
from .usecase.helpers import bucket_name, parse_boolean, parse_params
from .usecase.new import New as NewContentBusUseCase

__all__ = [
    "ErrInvalidRequest",
    "ErrMountNotFound",
    "IContentBus",
    "Config",
    "HandlerRequest",
    "Params",
    "StorageFactory",
    "bucket_name",
    "parse_boolean",
    "parse_params",
    "NewContentBusUseCase",
]
