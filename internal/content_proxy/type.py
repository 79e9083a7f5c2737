from dataclasses import dataclass
from typing import Optional

from internal.mount.type import MountPoint
from .constant import DEFAULT_TIMEOUT_MS


@dataclass
class Config:
    """Content proxy client configuration.

    Attributes:
        url: Base URL of the content proxy service
        timeout_ms: Request timeout in milliseconds
    """

    url: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        if not self.url:
            raise ValueError("url cannot be empty")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")


@dataclass
class FetchInput:
    """Coordinates of one document plus per-request identity.

    Attributes:
        owner: Repository owner
        repo: Repository name
        ref: Branch or tag
        path: Document path
        mount: Mount point covering the path, if any
        request_id: Caller request id, forwarded upstream
        token: Upstream access token, if any
        last_modified: Last known modification time for a conditional fetch
    """

    owner: str
    repo: str
    ref: str
    path: str
    mount: Optional[MountPoint] = None
    request_id: str = ""
    token: Optional[str] = None
    last_modified: Optional[str] = None
