from typing import Optional

from pkg.logger.logger import Logger
from pkg.minio.interface import IObjectStorage
from ..constant import FSTAB_FILENAME
from ..interface import IMountLoader
from ..type import MountConfig
from .helpers import parse_mount_config


class CodeBusMountLoader(IMountLoader):
    """Reads fstab.yaml for a repository from the code bus bucket."""

    def __init__(self, storage: IObjectStorage, logger: Optional[Logger] = None):
        self.storage = storage
        self.logger = logger

    def load(self, owner: str, repo: str, ref: str) -> Optional[MountConfig]:
        key = f"{owner}/{repo}/{ref}/{FSTAB_FILENAME}"
        result = self.storage.load(key)
        if not result.found:
            if self.logger:
                self.logger.info(
                    f"internal.mount.usecase: {key} not found in bucket '{self.storage.bucket}'"
                )
            return None
        return parse_mount_config(result.data.decode("utf-8"))
