DEFAULT_TIMEOUT_MS = 20000

# Headers copied from a successful upstream response
PASSTHROUGH_HEADERS = (
    "content-type",
    "last-modified",
    "x-source-location",
)

HEADER_REQUEST_ID = "x-request-id"
HEADER_GITHUB_TOKEN = "x-github-token"
HEADER_IF_MODIFIED_SINCE = "if-modified-since"
HEADER_ERROR = "x-error"
HEADER_CACHE_CONTROL = "cache-control"

# Error responses must not be cached as long as content
ERROR_CACHE_CONTROL = "private, no-cache"

# Upstream 5xx collapse into this status
UPSTREAM_ERROR_STATUS = 502
