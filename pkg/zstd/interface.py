"""Interface for payload compression."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IZstd(Protocol):
    """Protocol for in-memory compression used by the object store."""

    @property
    def encoding(self) -> str:
        """Content-Encoding value recorded next to compressed objects."""
        ...

    def compress(self, data: bytes, level: Optional[int] = None) -> bytes:
        """Compress bytes data in memory."""
        ...

    def decompress(self, data: bytes) -> bytes:
        """Decompress bytes data in memory."""
        ...


__all__ = ["IZstd"]
