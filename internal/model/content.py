"""Uniform response shape passed between the content proxy and the handler."""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional


@dataclass
class ContentResponse:
    """Status, headers and body of a fetched document or a handler outcome.

    Header names are kept lower-cased.
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        self.headers = {name.lower(): value for name, value in self.headers.items()}
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)

    @classmethod
    def empty(cls, status: int, headers: Optional[Mapping[str, str]] = None) -> "ContentResponse":
        return cls(status=status, headers=dict(headers or {}))


__all__ = ["ContentResponse"]
