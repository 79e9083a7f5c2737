from typing import Any, Dict, List
from urllib.parse import urlparse

import yaml

from ..constant import (
    GOOGLE_HOSTS,
    MOUNTPOINTS_KEY,
    ONEDRIVE_HOST_SUFFIXES,
    TYPE_GOOGLE,
    TYPE_MARKUP,
    TYPE_ONEDRIVE,
)
from ..errors import ErrInvalidMountConfig
from ..type import MountConfig, MountPoint


def mount_type(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    if host.endswith(ONEDRIVE_HOST_SUFFIXES):
        return TYPE_ONEDRIVE
    if host in GOOGLE_HOSTS:
        return TYPE_GOOGLE
    return TYPE_MARKUP


def _mount_point(path: str, value: Any) -> MountPoint:
    if isinstance(value, str):
        return MountPoint(path=path, type=mount_type(value), url=value)
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        url = value["url"]
        return MountPoint(path=path, type=value.get("type") or mount_type(url), url=url)
    raise ErrInvalidMountConfig(f"invalid mount point {path}: {value!r}")


def parse_mount_config(source: str) -> MountConfig:
    """Parse the text of an fstab.yaml.

    Raises:
        ErrInvalidMountConfig: If the YAML is malformed or a mount has no URL.
    """
    try:
        data = yaml.safe_load(source) or {}
    except yaml.YAMLError as exc:
        raise ErrInvalidMountConfig(f"fstab.yaml is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ErrInvalidMountConfig("fstab.yaml must be a mapping")

    mountpoints: Dict[str, Any] = data.get(MOUNTPOINTS_KEY) or {}
    if not isinstance(mountpoints, dict):
        raise ErrInvalidMountConfig(f"'{MOUNTPOINTS_KEY}' must be a mapping")

    mounts: List[MountPoint] = [
        _mount_point(str(path), value) for path, value in mountpoints.items()
    ]
    return MountConfig(mounts=mounts)
