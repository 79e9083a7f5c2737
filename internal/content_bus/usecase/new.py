from typing import Optional

from pkg.logger.logger import Logger
from internal.content_proxy.interface import IContentProxy
from ..interface import IContentBus
from ..type import Config, StorageFactory
from .usecase import ContentBusUseCase, MountLoaderFactory


def New(
    config: Config,
    storage_factory: StorageFactory,
    content_proxy: IContentProxy,
    logger: Optional[Logger] = None,
    mount_loader_factory: Optional[MountLoaderFactory] = None,
) -> IContentBus:
    """Create the content bus handler.

    Args:
        config: Bucket naming configuration
        storage_factory: Builds a storage client for (bucket, tags, read_only)
        content_proxy: Upstream document fetcher
        logger: Logger instance (optional)
        mount_loader_factory: Builds the fstab loader from the code bus storage
    """
    if not isinstance(config, Config):
        raise ValueError("config must be an instance of Config")

    return ContentBusUseCase(
        config=config,
        storage_factory=storage_factory,
        content_proxy=content_proxy,
        logger=logger,
        mount_loader_factory=mount_loader_factory,
    )


__all__ = ["New"]
