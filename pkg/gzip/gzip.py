import gzip
from typing import Optional

from .constant import ALGORITHM_NAME
from .interface import IGzip
from .type import GzipConfig


class Gzip(IGzip):
    """
    Gzip codec for object payloads.

    Output is a standard gzip member with mtime 0, so the same input always
    produces the same bytes.
    """

    def __init__(self, config: Optional[GzipConfig] = None):
        self.config = config or GzipConfig()

    @property
    def encoding(self) -> str:
        return ALGORITHM_NAME

    def compress(self, data: bytes) -> bytes:
        return gzip.compress(data, compresslevel=self.config.level, mtime=0)

    def decompress(self, data: bytes) -> bytes:
        """
        Decompress a gzip payload.

        Raises:
            gzip.BadGzipFile: If data is not gzip
            EOFError: If the payload is truncated
            zlib.error: If the deflate stream is corrupt
        """
        return gzip.decompress(data)


__all__ = [
    "Gzip",
    "IGzip",
    "GzipConfig",
]
