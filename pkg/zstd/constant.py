ALGORITHM_NAME = "zstd"

# Public levels 0-3 and the native zstd level each one selects.
# Level 0 still writes a zstd frame.
ZSTD_LEVEL_MAP = {
    0: 0,
    1: 3,
    2: 10,
    3: 19,
}
DEFAULT_LEVEL = 2

ERROR_INVALID_LEVEL = "Invalid compression level: {level}. Must be 0-3."
ERROR_COMPRESSION_FAILED = "Zstd compression failed: {error}"
ERROR_DECOMPRESSION_FAILED = "Zstd decompression failed: {error}"
