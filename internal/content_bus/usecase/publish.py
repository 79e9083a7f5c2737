from typing import Optional

from pkg.logger.logger import Logger
from pkg.minio.interface import IObjectStorage
from internal.model.content import ContentResponse
from ..constant import PREFIX_LIVE, PREFIX_PREVIEW
from ..type import Params
from .helpers import error_response


def publish(
    storage: IObjectStorage,
    params: Params,
    logger: Optional[Logger] = None,
) -> ContentResponse:
    """Copy the preview version of a document to live."""
    result = storage.copy(f"{PREFIX_PREVIEW}{params.path}", f"{PREFIX_LIVE}{params.path}")
    if not result.found:
        if logger:
            logger.info(f"internal.content_bus.usecase.publish: {result.message}")
        return error_response(404, result.message or f"source does not exist: {result.key}")

    if logger:
        logger.info(f"internal.content_bus.usecase.publish: Published {storage.bucket}/{result.key}")
    return ContentResponse.empty(200)
