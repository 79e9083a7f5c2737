from .errors import ErrInvalidMountConfig
from .interface import IMountLoader
from .type import MountConfig, MountPoint
from .usecase.helpers import parse_mount_config
from .usecase.new import New as NewMountLoader

__all__ = [
    "ErrInvalidMountConfig",
    "IMountLoader",
    "MountConfig",
    "MountPoint",
    "parse_mount_config",
    "NewMountLoader",
]
