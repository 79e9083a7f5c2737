from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .type import MountConfig


@runtime_checkable
class IMountLoader(Protocol):
    def load(self, owner: str, repo: str, ref: str) -> Optional["MountConfig"]:
        ...


__all__ = ["IMountLoader"]
