DEFAULT_ENDPOINT = "s3.amazonaws.com"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Bucket whose tag set seeds every newly created tenant bucket
DEFAULT_TEMPLATE_BUCKET = "helix-content-bus"

USER_METADATA_PREFIX = "x-amz-meta-"
CONTENT_ENCODING_HEADER = "Content-Encoding"
CONTENT_TYPE_HEADER = "Content-Type"

# Content encodings understood by load(); new objects are gzip unless configured
ENCODING_ZSTD = "zstd"
ENCODING_GZIP = "gzip"

EXPIRES_HEADER = "Expires"

# PutObject parameter for each system attribute besides Content-Type and Expires
SYSTEM_HEADER_PARAMS = {
    "Cache-Control": "CacheControl",
}

# Single attempt; retrying is left to the caller, as for the minio pool
WRITER_MAX_ATTEMPTS = 1

# Response header names the object store keeps as system attributes
SYSTEM_HEADERS = {
    "content-type": "Content-Type",
    "cache-control": "Cache-Control",
    "expires": "Expires",
}

# Response header names stored under a different metadata name
METADATA_HEADER_MAP = {
    "last-modified": "x-source-last-modified",
}

# S3 error codes treated as absence
NOT_FOUND_CODES = ("NoSuchKey", "NoSuchBucket", "NoSuchObject", "ResourceNotFound")
ERR_NO_SUCH_KEY = "NoSuchKey"

# Anonymous requests are denied on every tenant bucket
PUBLIC_ACCESS_BLOCK_SID = "BlockPublicAccess"

# Tag values: letters, digits, space and + - = . _ : / @
TAG_VALUE_INVALID_CHARS = r"[^A-Za-z0-9 +\-=._:/@]"
SHAREPOINT_URL_PATTERN = r"^https://[^/]+\.sharepoint\.com/"
GOOGLE_DRIVE_URL_PATTERN = r"^https://drive\.google\.com/"

ERROR_BUCKET_REQUIRED = "bucket is required."
ERROR_READ_ONLY = "Storage is read-only: {bucket}"
ERROR_SOURCE_NOT_FOUND = "source does not exist: {key}"
