from typing import Optional

import zstandard as zstd  # type: ignore

from .constant import (
    ALGORITHM_NAME,
    ERROR_COMPRESSION_FAILED,
    ERROR_DECOMPRESSION_FAILED,
    ERROR_INVALID_LEVEL,
    ZSTD_LEVEL_MAP,
)
from .interface import IZstd
from .type import ZstdConfig


class Zstd(IZstd):
    """
    Zstandard codec for object payloads.

    Every payload goes through a real zstd frame, even at level 0, so that the
    recorded content encoding always matches the stored bytes.
    """

    def __init__(self, config: Optional[ZstdConfig] = None):
        self.config = config or ZstdConfig()

    @property
    def encoding(self) -> str:
        return ALGORITHM_NAME

    def compress(self, data: bytes, level: Optional[int] = None) -> bytes:
        """
        Compress bytes data using Zstd.

        Args:
            data: Raw bytes to compress
            level: Compression level (0-3), defaults to config.default_level

        Returns:
            Compressed bytes

        Raises:
            ValueError: If level is invalid
            zstd.ZstdError: If compression fails
        """
        if level is None:
            level = self.config.default_level
        if level not in ZSTD_LEVEL_MAP:
            raise ValueError(ERROR_INVALID_LEVEL.format(level=level))

        try:
            compressor = zstd.ZstdCompressor(level=ZSTD_LEVEL_MAP[level])
            return compressor.compress(data)
        except zstd.ZstdError as e:
            raise zstd.ZstdError(ERROR_COMPRESSION_FAILED.format(error=e)) from e

    def decompress(self, data: bytes) -> bytes:
        """
        Decompress Zstd-compressed bytes.

        Frames written without a content size (streamed by other writers) are
        decoded through a stream reader.

        Raises:
            zstd.ZstdError: If decompression fails
        """
        try:
            decompressor = zstd.ZstdDecompressor()
            params = zstd.get_frame_parameters(data)
            if params.content_size == zstd.CONTENTSIZE_UNKNOWN:
                with decompressor.stream_reader(data) as reader:
                    return reader.read()
            return decompressor.decompress(data)
        except zstd.ZstdError as e:
            raise zstd.ZstdError(ERROR_DECOMPRESSION_FAILED.format(error=e)) from e


__all__ = [
    "Zstd",
    "IZstd",
    "ZstdConfig",
]
