from __future__ import annotations

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from internal.model.content import ContentResponse
    from .type import HandlerRequest


@runtime_checkable
class IContentBus(Protocol):
    def handle(self, request: "HandlerRequest") -> "ContentResponse":
        ...


__all__ = ["IContentBus"]
