"""Content bus handler: validates a request, resolves its tenant bucket and
dispatches to update or publish."""

from typing import Callable, Optional

from pkg.logger.logger import Logger
from pkg.minio.interface import IObjectStorage
from pkg.minio.mapping import escape_tag_value
from internal.content_proxy.errors import ErrUpstreamUnavailable
from internal.content_proxy.interface import IContentProxy
from internal.model.content import ContentResponse
from internal.mount.interface import IMountLoader
from internal.mount.type import MountPoint
from internal.mount.usecase.new import New as NewMountLoader
from ..constant import (
    ACTION_PUBLISH,
    ACTION_UPDATE,
    MOUNTPOINT_TAG,
    MSG_FSTAB_NOT_FOUND,
    MSG_NOT_MOUNTED,
    MSG_UNKNOWN_ACTION,
)
from ..errors import ErrInvalidRequest, ErrMountNotFound
from ..interface import IContentBus
from ..type import Config, HandlerRequest, Params, StorageFactory
from .helpers import bucket_name, error_response, parse_params
from .publish import publish
from .update import update

MountLoaderFactory = Callable[[IObjectStorage], IMountLoader]


class ContentBusUseCase(IContentBus):
    """Turns one request into an update (fetch and store) or a publish (copy).

    Every storage client opened while handling a request is closed before
    the response is returned.
    """

    def __init__(
        self,
        config: Config,
        storage_factory: StorageFactory,
        content_proxy: IContentProxy,
        logger: Optional[Logger] = None,
        mount_loader_factory: Optional[MountLoaderFactory] = None,
    ):
        self.config = config
        self.storage_factory = storage_factory
        self.content_proxy = content_proxy
        self.logger = logger
        self.mount_loader_factory = mount_loader_factory or (
            lambda storage: NewMountLoader(storage, logger=logger)
        )

    def handle(self, request: HandlerRequest) -> ContentResponse:
        try:
            params = parse_params(request.params)
            mount = self._resolve_mount(params)
        except (ErrInvalidRequest, ErrMountNotFound) as exc:
            return self._error(400, str(exc))
        except Exception as exc:
            return self._failure(exc)

        if params.action not in (ACTION_UPDATE, ACTION_PUBLISH):
            return self._error(400, MSG_UNKNOWN_ACTION.format(action=params.action))

        storage = None
        try:
            storage = self.storage_factory(
                bucket_name(self.config.bucket_prefix, mount.url),
                {MOUNTPOINT_TAG: escape_tag_value(mount.url)},
                False,
            )
            if params.action == ACTION_UPDATE:
                return update(
                    storage, self.content_proxy, params, mount, request, self.logger
                )
            return publish(storage, params, self.logger)
        except ErrUpstreamUnavailable as exc:
            return self._error(504, str(exc))
        except Exception as exc:
            return self._failure(exc)
        finally:
            if storage is not None:
                storage.close()

    def _resolve_mount(self, params: Params) -> MountPoint:
        code_storage = self.storage_factory(self.config.code_bucket, None, True)
        try:
            fstab = self.mount_loader_factory(code_storage).load(
                params.owner, params.repo, params.ref
            )
        finally:
            code_storage.close()

        if fstab is None:
            raise ErrMountNotFound(
                MSG_FSTAB_NOT_FOUND.format(
                    owner=params.owner,
                    repo=params.repo,
                    ref=params.ref,
                    bucket=self.config.code_bucket,
                )
            )

        mount = fstab.match(params.path)
        if mount is None:
            raise ErrMountNotFound(MSG_NOT_MOUNTED.format(path=params.path))
        return mount

    def _error(self, status: int, message: str) -> ContentResponse:
        if self.logger:
            level = "error" if status >= 500 else "info"
            self.logger.log(level, f"internal.content_bus.usecase: {status} {message}")
        return error_response(status, message)

    def _failure(self, exc: Exception) -> ContentResponse:
        if self.logger:
            self.logger.exception(f"internal.content_bus.usecase: Request failed: {exc}")
        return error_response(500, str(exc) or exc.__class__.__name__)
