from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class MountPoint:
    """A configured mount, resolved for one request path.

    Attributes:
        path: Mount path as declared in fstab.yaml (e.g. "/mnt")
        type: Content source type (onedrive, google, markup)
        url: Content source URL
        rel_path: Request path relative to the mount, with a leading "/"
    """

    path: str
    type: str
    url: str
    rel_path: str = ""


@dataclass
class MountConfig:
    """Parsed fstab.yaml: a set of mount points, longest path wins."""

    mounts: List[MountPoint] = field(default_factory=list)

    def __post_init__(self):
        self.mounts = sorted(self.mounts, key=lambda mp: len(mp.path), reverse=True)

    def match(self, path: str) -> Optional[MountPoint]:
        """Find the mount covering ``path``.

        A mount covers a path that equals it or lies below it. Returns None
        when nothing matches.
        """
        for mount in self.mounts:
            base = mount.path.rstrip("/")
            if path == mount.path or path == base or path.startswith(base + "/"):
                rel_path = path[len(base):] or "/"
                return MountPoint(
                    path=mount.path, type=mount.type, url=mount.url, rel_path=rel_path
                )
        return None


__all__ = ["MountPoint", "MountConfig"]
