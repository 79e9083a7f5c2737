"""Tests for fstab.yaml parsing and mount resolution."""

import pytest
from unittest.mock import MagicMock

from internal.mount import ErrInvalidMountConfig, MountConfig, MountPoint, NewMountLoader
from internal.mount import parse_mount_config
from internal.mount.usecase.helpers import mount_type
from pkg.minio.type import StorageResult

FSTAB = """\
mountpoints:
  /: https://adobe.sharepoint.com/sites/cg-helix/Shared%20Documents/site
  /mnt/: https://drive.google.com/drive/folders/1snjXQ6bgy0jSGDx_kdIuwlJAvlWoM3x0
  /ext:
    url: https://example.com/content
"""


class TestMountType:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://adobe.sharepoint.com/sites/x", "onedrive"),
            ("https://1drv.ms/f/s!abc", "onedrive"),
            ("https://onedrive.live.com/?id=1", "onedrive"),
            ("https://drive.google.com/drive/folders/abc", "google"),
            ("https://docs.google.com/document/d/abc", "google"),
            ("https://example.com/content", "markup"),
        ],
    )
    def test_mount_type(self, url, expected):
        assert mount_type(url) == expected


class TestParseMountConfig:
    def test_parse(self):
        """Test string and mapping mount values are both accepted."""
        config = parse_mount_config(FSTAB)

        by_path = {mp.path: mp for mp in config.mounts}
        assert set(by_path) == {"/", "/mnt/", "/ext"}
        assert by_path["/"].type == "onedrive"
        assert by_path["/mnt/"].type == "google"
        assert by_path["/ext"].url == "https://example.com/content"
        assert by_path["/ext"].type == "markup"

    def test_longest_path_first(self):
        config = parse_mount_config(FSTAB)

        assert config.mounts[-1].path == "/"

    def test_empty_document(self):
        assert parse_mount_config("").mounts == []

    def test_invalid_yaml(self):
        with pytest.raises(ErrInvalidMountConfig, match="not valid YAML"):
            parse_mount_config("mountpoints: [unclosed")

    def test_not_a_mapping(self):
        with pytest.raises(ErrInvalidMountConfig):
            parse_mount_config("- just\n- a list\n")

    def test_mount_without_url(self):
        with pytest.raises(ErrInvalidMountConfig, match="/bad"):
            parse_mount_config("mountpoints:\n  /bad:\n    type: google\n")


class TestMatch:
    @pytest.fixture
    def config(self):
        return parse_mount_config(FSTAB)

    def test_match_below_mount(self, config):
        """Test the most specific mount wins and rel_path is relative to it."""
        mount = config.match("/mnt/example-post.md")

        assert mount.path == "/mnt/"
        assert mount.type == "google"
        assert mount.rel_path == "/example-post.md"

    def test_match_root(self, config):
        mount = config.match("/index.md")

        assert mount.path == "/"
        assert mount.rel_path == "/index.md"

    def test_prefix_is_not_a_match(self, config):
        """Test /mntx does not fall under /mnt/."""
        assert config.match("/mntx/page.md").path == "/"

    def test_exact_mount_path(self, config):
        assert config.match("/ext").rel_path == "/"

    def test_no_match(self):
        config = MountConfig(mounts=[MountPoint(path="/docs", type="markup", url="https://x")])

        assert config.match("/blog/post.md") is None


class TestCodeBusMountLoader:
    def test_load(self):
        """Test fstab.yaml is read from {owner}/{repo}/{ref}."""
        storage = MagicMock()
        storage.load.return_value = StorageResult.ok(
            "foo/bar/baz/fstab.yaml", data=FSTAB.encode("utf-8")
        )

        config = NewMountLoader(storage).load("foo", "bar", "baz")

        storage.load.assert_called_once_with("foo/bar/baz/fstab.yaml")
        assert len(config.mounts) == 3

    def test_load_missing(self):
        """Test an absent fstab.yaml yields None."""
        storage = MagicMock()
        storage.bucket = "helix-code-bus"
        storage.load.return_value = StorageResult.not_found("foo/bar/baz/fstab.yaml")
        logger = MagicMock()

        assert NewMountLoader(storage, logger).load("foo", "bar", "baz") is None
        logger.info.assert_called_once()
