from typing import Optional

from pkg.logger.logger import Logger
from pkg.minio.interface import IObjectStorage
from internal.content_proxy.interface import IContentProxy
from internal.content_proxy.type import FetchInput
from internal.model.content import ContentResponse
from internal.mount.type import MountPoint
from ..constant import SOURCE_LAST_MODIFIED
from ..type import HandlerRequest, Params


def update(
    storage: IObjectStorage,
    content_proxy: IContentProxy,
    params: Params,
    mount: MountPoint,
    request: HandlerRequest,
    logger: Optional[Logger] = None,
) -> ContentResponse:
    """Fetch a document and store it under ``prefix + path``.

    An unsuccessful fetch (including 304) is returned as-is and nothing is
    stored.
    """
    key = params.key

    last_modified = None
    if params.use_last_modified:
        result = storage.metadata(key)
        if result.found:
            last_modified = result.metadata.get(SOURCE_LAST_MODIFIED)

    res = content_proxy.fetch(
        FetchInput(
            owner=params.owner,
            repo=params.repo,
            ref=params.ref,
            path=params.path,
            mount=mount,
            request_id=request.request_id,
            token=request.token,
            last_modified=last_modified,
        )
    )
    if not res.ok:
        return res

    storage.store(key, res.body, res.headers)
    if logger:
        logger.info(f"internal.content_bus.usecase.update: Stored {storage.bucket}/{key}")
    return ContentResponse.empty(200)
