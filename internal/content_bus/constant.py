ACTION_UPDATE = "update"
ACTION_PUBLISH = "publish"

PREFIX_LIVE = "live"
PREFIX_PREVIEW = "preview"

DEFAULT_CODE_BUCKET = "helix-code-bus"
DEFAULT_BUCKET_PREFIX = "h3"
# Hex digits of the mount URL digest kept in the bucket name
BUCKET_HASH_LENGTH = 59

MOUNTPOINT_TAG = "mountpoint"
SOURCE_LAST_MODIFIED = "x-source-last-modified"

HEADER_ERROR = "x-error"
HEADER_CACHE_CONTROL = "cache-control"
ERROR_CACHE_CONTROL = "no-store, private, must-revalidate"

MSG_PARAMS_REQUIRED = "owner, repo, ref, and path parameters are required"
MSG_FSTAB_NOT_FOUND = "{owner}/{repo}/{ref}/fstab.yaml not found in bucket '{bucket}'"
MSG_NOT_MOUNTED = "path specified is not mounted in fstab.yaml: {path}"
MSG_UNKNOWN_ACTION = "Action unknown: {action}"
