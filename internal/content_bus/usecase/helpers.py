import hashlib
from typing import Any, Mapping

from internal.model.content import ContentResponse
from ..constant import (
    ACTION_UPDATE,
    BUCKET_HASH_LENGTH,
    ERROR_CACHE_CONTROL,
    HEADER_CACHE_CONTROL,
    HEADER_ERROR,
    MSG_PARAMS_REQUIRED,
    PREFIX_LIVE,
)
from ..errors import ErrInvalidRequest
from ..type import Params


def parse_boolean(value: Any, default: bool) -> bool:
    """Parse a boolean given either as a string or a boolean."""
    if value is False or value == "false":
        return False
    return bool(value) if value else default


def parse_params(params: Mapping[str, Any]) -> Params:
    """Validate raw request parameters.

    Raises:
        ErrInvalidRequest: If owner, repo, ref or path is missing.
    """
    owner = params.get("owner")
    repo = params.get("repo")
    ref = params.get("ref")
    path = params.get("path")
    if not (owner and repo and ref and path):
        raise ErrInvalidRequest(MSG_PARAMS_REQUIRED)

    return Params(
        owner=owner,
        repo=repo,
        ref=ref,
        path=path,
        prefix=params.get("prefix") or PREFIX_LIVE,
        action=params.get("action") or ACTION_UPDATE,
        use_last_modified=parse_boolean(params.get("useLastModified"), False),
    )


def bucket_name(prefix: str, mount_url: str) -> str:
    """Tenant bucket for a mount URL; the same URL always maps to the same bucket."""
    digest = hashlib.sha256(mount_url.encode("utf-8")).hexdigest()
    return f"{prefix}{digest[:BUCKET_HASH_LENGTH]}"


def error_response(status: int, message: str) -> ContentResponse:
    return ContentResponse(
        status=status,
        headers={
            HEADER_ERROR: message,
            HEADER_CACHE_CONTROL: ERROR_CACHE_CONTROL,
        },
        body=message,
    )
