"""Interface for gzip payload compression."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IGzip(Protocol):
    @property
    def encoding(self) -> str:
        """Content-Encoding value recorded next to compressed objects."""
        ...

    def compress(self, data: bytes) -> bytes:
        ...

    def decompress(self, data: bytes) -> bytes:
        ...


__all__ = ["IGzip"]
