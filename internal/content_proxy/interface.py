from __future__ import annotations

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from internal.model.content import ContentResponse
    from .type import FetchInput


@runtime_checkable
class IContentProxy(Protocol):
    def fetch(self, input_data: "FetchInput") -> "ContentResponse":
        ...

    def close(self) -> None:
        ...


__all__ = ["IContentProxy"]
