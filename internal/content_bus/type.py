from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from pkg.minio.interface import IObjectStorage
from .constant import (
    ACTION_UPDATE,
    DEFAULT_BUCKET_PREFIX,
    DEFAULT_CODE_BUCKET,
    PREFIX_LIVE,
)

# (bucket, tags, read_only) -> storage client; must not perform I/O
StorageFactory = Callable[[str, Optional[Mapping[str, str]], bool], IObjectStorage]


@dataclass
class Config:
    """Handler configuration.

    Attributes:
        code_bucket: Read-only bucket holding each repository's fstab.yaml
        bucket_prefix: Prefix of tenant bucket names
    """

    code_bucket: str = DEFAULT_CODE_BUCKET
    bucket_prefix: str = DEFAULT_BUCKET_PREFIX


@dataclass
class HandlerRequest:
    """Incoming request, already decoded by the entry point.

    Attributes:
        params: Merged query and body parameters
        request_id: Caller request id
        token: Upstream access token (x-github-token)
    """

    params: Dict[str, Any] = field(default_factory=dict)
    request_id: str = ""
    token: Optional[str] = None


@dataclass
class Params:
    """Validated request parameters."""

    owner: str
    repo: str
    ref: str
    path: str
    prefix: str = PREFIX_LIVE
    action: str = ACTION_UPDATE
    use_last_modified: bool = False

    @property
    def key(self) -> str:
        return f"{self.prefix}{self.path}"
