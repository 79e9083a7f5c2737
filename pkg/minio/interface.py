"""Interface for tenant object storage."""

from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from .type import StorageResult


@runtime_checkable
class ICompressor(Protocol):
    """Payload codec. Both the gzip and zstd codecs satisfy it."""

    @property
    def encoding(self) -> str:
        ...

    def compress(self, data: bytes) -> bytes:
        ...

    def decompress(self, data: bytes) -> bytes:
        ...


@runtime_checkable
class IObjectStorage(Protocol):
    """Protocol for a storage client bound to one bucket.

    Instances are per invocation and not shared between threads.
    """

    @property
    def bucket(self) -> str:
        ...

    def ensure_ready(self) -> None:
        """Run bucket provisioning once per client."""
        ...

    def load(self, key: str) -> StorageResult:
        """Load and decompress an object."""
        ...

    def metadata(self, key: str) -> StorageResult:
        """Load an object's user metadata without its body."""
        ...

    def store(self, key: str, body: bytes, headers: Mapping[str, str]) -> None:
        """Compress and store an object with headers mapped to attributes."""
        ...

    def store_data(
        self,
        key: str,
        data: bytes,
        content_type: str = ...,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        """Store raw bytes as-is."""
        ...

    def copy(self, src_key: str, dest_key: str) -> StorageResult:
        """Copy an object within the bucket."""
        ...

    def close(self) -> None:
        """Release the network client."""
        ...


__all__ = ["ICompressor", "IObjectStorage"]
