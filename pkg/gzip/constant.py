ALGORITHM_NAME = "gzip"

# zlib levels; 6 is what gzip and most HTTP servers use
MIN_LEVEL = 0
MAX_LEVEL = 9
DEFAULT_LEVEL = 6

ERROR_INVALID_LEVEL = "Invalid compression level: {level}. Must be 0-9."
