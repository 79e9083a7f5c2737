from typing import Optional

import httpx

from pkg.logger.logger import Logger
from ..interface import IContentProxy
from ..type import Config
from .usecase import ContentProxyUseCase


def New(
    config: Config,
    logger: Optional[Logger] = None,
    client: Optional[httpx.Client] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> IContentProxy:
    """Create a content proxy client.

    Args:
        config: Base URL and timeout
        logger: Logger instance (optional)
        client: Preconfigured httpx client (optional, caller keeps ownership)
        transport: Transport for the client built when none is given (optional)
    """
    if not isinstance(config, Config):
        raise ValueError("config must be an instance of Config")
    return ContentProxyUseCase(
        config=config, logger=logger, client=client, transport=transport
    )


__all__ = ["New"]
