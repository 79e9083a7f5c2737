from typing import Dict, List, Tuple

import httpx

from ..constant import (
    HEADER_GITHUB_TOKEN,
    HEADER_IF_MODIFIED_SINCE,
    HEADER_REQUEST_ID,
    UPSTREAM_ERROR_STATUS,
)
from ..type import FetchInput


def create_url(base_url: str, input_data: FetchInput) -> str:
    """Build the content proxy URL for one document."""
    params: List[Tuple[str, str]] = [
        ("owner", input_data.owner),
        ("repo", input_data.repo),
        ("ref", input_data.ref),
        ("path", input_data.path),
    ]
    mount = input_data.mount
    if mount:
        params += [
            ("mpType", mount.type),
            ("mpRelPath", mount.rel_path),
            ("mpURL", mount.url),
        ]
    params.append(("rid", input_data.request_id or ""))
    return str(httpx.URL(base_url, params=params))


def request_headers(input_data: FetchInput) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    if input_data.request_id:
        headers[HEADER_REQUEST_ID] = input_data.request_id
    if input_data.token:
        headers[HEADER_GITHUB_TOKEN] = input_data.token
    if input_data.last_modified:
        headers[HEADER_IF_MODIFIED_SINCE] = input_data.last_modified
    return headers


def propagate_status_code(status: int) -> int:
    """Status to report for an unsuccessful upstream answer.

    Anything below 500 (304 and 4xx included) passes through; every 5xx
    becomes a bad gateway.
    """
    if status < 500:
        return status
    return UPSTREAM_ERROR_STATUS


def log_level_for_status(status: int) -> str:
    if status in (304, 404):
        return "info"
    if status < 500:
        return "warning"
    return "error"
