from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .constant import DEFAULT_ENDPOINT


@dataclass
class MinIOConfig:
    """Object store connection configuration.

    Credentials are optional. When region, access_key and secret_key are all
    set they are used as static credentials; otherwise the client falls back to
    the ambient provider chain (environment, then IAM role).

    Attributes:
        endpoint: S3-compatible endpoint (default AWS S3)
        access_key: Access key id
        secret_key: Secret access key
        region: Bucket region
        secure: Whether to use HTTPS
    """

    endpoint: str = DEFAULT_ENDPOINT
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    region: Optional[str] = None
    secure: bool = True

    def __post_init__(self):
        """Validate configuration."""
        if not self.endpoint or not self.endpoint.strip():
            raise ValueError("endpoint cannot be empty")

        if bool(self.access_key) != bool(self.secret_key):
            raise ValueError("access_key and secret_key must be provided together")

        self.endpoint = (
            self.endpoint.replace("http://", "").replace("https://", "").strip()
        )

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.region and self.access_key and self.secret_key)


class StorageState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class ResultStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass
class StorageResult:
    """Outcome of a load, metadata or copy call.

    Expected absence is reported here; unexpected backend failures are raised.

    Attributes:
        status: OK or NOT_FOUND
        key: Object key the call addressed
        data: Object contents (load only)
        metadata: User metadata (metadata only)
        message: Human readable detail for NOT_FOUND outcomes
    """

    status: ResultStatus
    key: str
    data: Optional[bytes] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == ResultStatus.OK

    @classmethod
    def ok(cls, key: str, **kwargs) -> "StorageResult":
        return cls(status=ResultStatus.OK, key=key, **kwargs)

    @classmethod
    def not_found(cls, key: str, message: Optional[str] = None) -> "StorageResult":
        return cls(status=ResultStatus.NOT_FOUND, key=key, message=message)


class HeaderKind(str, Enum):
    SYSTEM = "system"
    METADATA = "metadata"


@dataclass(frozen=True)
class HeaderClass:
    """Where a response header lands on the stored object."""

    kind: HeaderKind
    name: str


__all__ = [
    "MinIOConfig",
    "StorageState",
    "ResultStatus",
    "StorageResult",
    "HeaderKind",
    "HeaderClass",
]
