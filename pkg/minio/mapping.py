"""Mapping between HTTP response headers and object store attributes."""

import re
from typing import Dict, Mapping, Tuple
from urllib.parse import unquote

from .constant import (
    GOOGLE_DRIVE_URL_PATTERN,
    METADATA_HEADER_MAP,
    SHAREPOINT_URL_PATTERN,
    SYSTEM_HEADERS,
    TAG_VALUE_INVALID_CHARS,
)
from .type import HeaderClass, HeaderKind

_INVALID_TAG_CHARS = re.compile(TAG_VALUE_INVALID_CHARS)
_SHAREPOINT_URL = re.compile(SHAREPOINT_URL_PATTERN, re.IGNORECASE)
_GOOGLE_DRIVE_URL = re.compile(GOOGLE_DRIVE_URL_PATTERN, re.IGNORECASE)


def classify_header(name: str) -> HeaderClass:
    """Classify a response header as a system attribute or user metadata.

    content-type, cache-control and expires map to the header names the
    object store accepts natively. Everything else becomes metadata under its
    lower-cased name, unless METADATA_HEADER_MAP renames it.
    """
    lower = name.lower()
    if lower in SYSTEM_HEADERS:
        return HeaderClass(HeaderKind.SYSTEM, SYSTEM_HEADERS[lower])
    return HeaderClass(HeaderKind.METADATA, METADATA_HEADER_MAP.get(lower, lower))


def split_headers(headers: Mapping[str, str]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Split headers into (system attributes, user metadata)."""
    system: Dict[str, str] = {}
    metadata: Dict[str, str] = {}
    for name, value in headers.items():
        header_class = classify_header(name)
        if header_class.kind == HeaderKind.SYSTEM:
            system[header_class.name] = value
        else:
            metadata[header_class.name] = value
    return system, metadata


def escape_tag_value(value: str) -> str:
    """Turn an arbitrary string into a legal bucket tag value.

    SharePoint URLs are percent-decoded, Google Drive URLs lose their query
    string, and any other value has each illegal character replaced by "_".
    """
    if _SHAREPOINT_URL.match(value):
        return unquote(value)
    if _GOOGLE_DRIVE_URL.match(value):
        return value.split("?", 1)[0]
    return _INVALID_TAG_CHARS.sub("_", value)


__all__ = ["classify_header", "split_headers", "escape_tag_value"]
