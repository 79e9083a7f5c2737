from typing import Optional

from pkg.logger.logger import Logger
from pkg.minio.interface import IObjectStorage
from ..interface import IMountLoader
from .usecase import CodeBusMountLoader


def New(
    storage: IObjectStorage,
    logger: Optional[Logger] = None,
) -> IMountLoader:
    return CodeBusMountLoader(storage=storage, logger=logger)


__all__ = ["New"]
