"""Factory for tenant storage clients."""

from typing import Mapping, Optional

from .constant import DEFAULT_TEMPLATE_BUCKET
from .interface import ICompressor, IObjectStorage
from .minio import MinioStorage
from .type import MinIOConfig


def New(
    config: MinIOConfig,
    bucket: str,
    tags: Optional[Mapping[str, str]] = None,
    read_only: bool = False,
    template_bucket: str = DEFAULT_TEMPLATE_BUCKET,
    compressor: Optional[ICompressor] = None,
) -> IObjectStorage:
    """Create a storage client for ``bucket``.

    No network call is made here; the bucket is provisioned lazily by the
    first operation.

    Raises:
        ValueError: If bucket is empty
    """
    return MinioStorage(
        config,
        bucket,
        tags=tags,
        read_only=read_only,
        template_bucket=template_bucket,
        compressor=compressor,
    )


__all__ = ["New"]
