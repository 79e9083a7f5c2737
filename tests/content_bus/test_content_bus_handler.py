"""End-to-end handler scenarios against the in-memory object store."""

import httpx
import pytest
from unittest.mock import MagicMock

from conftest import make_s3_error

from internal.content_bus import (
    Config,
    HandlerRequest,
    NewContentBusUseCase,
    bucket_name,
)
from internal.content_proxy import Config as ContentProxyConfig
from internal.content_proxy import NewContentProxy

MOUNT_URL = "https://drive.google.com/drive/folders/1snjXQ6bgy0jSGDx_kdIuwlJAvlWoM3x0"
FSTAB = f"mountpoints:\n  /mnt: {MOUNT_URL}\n".encode("utf-8")
LAST_MODIFIED = "Mon, 01 Feb 2021 10:00:00 GMT"
TENANT_BUCKET = bucket_name("h3", MOUNT_URL)

PARAMS = {"owner": "foo", "repo": "bar", "ref": "baz", "path": "/mnt/example-post.md"}


class Upstream:
    """Scripted content proxy backend; records every request it receives."""

    def __init__(self, status=200, body=b"hello", headers=None, error=None):
        self.status = status
        self.body = body
        self.headers = headers if headers is not None else {
            "content-type": "text/markdown",
            "last-modified": LAST_MODIFIED,
        }
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status, headers=self.headers, content=self.body)


@pytest.fixture
def code_bus(fake_minio):
    """Code bus bucket holding foo/bar/baz/fstab.yaml."""
    fake_minio.add_bucket("helix-code-bus")
    fake_minio.buckets["helix-code-bus"]["foo/bar/baz/fstab.yaml"] = {
        "data": FSTAB,
        "headers": {"Content-Type": "text/yaml"},
    }
    return fake_minio


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def make_usecase(storage_factory, upstream):
    def make(logger=None):
        proxy = NewContentProxy(
            ContentProxyConfig(url="https://content-proxy.example.com/v2"),
            client=httpx.Client(transport=httpx.MockTransport(upstream)),
        )
        return NewContentBusUseCase(
            Config(code_bucket="helix-code-bus", bucket_prefix="h3"),
            storage_factory=storage_factory,
            content_proxy=proxy,
            logger=logger,
        )

    return make


def handle(usecase, token=None, **params):
    merged = dict(PARAMS)
    merged.update(params)
    merged = {key: value for key, value in merged.items() if value is not None}
    return usecase.handle(HandlerRequest(params=merged, request_id="1234", token=token))


class TestValidation:
    def test_missing_parameter(self, make_usecase, storage_factory):
        """Test a missing path is rejected before any storage is opened."""
        response = handle(make_usecase(), path=None)

        assert response.status == 400
        assert "required" in response.header("x-error")
        assert response.header("cache-control") == "no-store, private, must-revalidate"
        assert storage_factory.created == []

    def test_fstab_missing(self, make_usecase, fake_minio):
        """Test a repository without fstab.yaml is a bad request."""
        response = handle(make_usecase())

        assert response.status == 400
        assert response.header("x-error") == (
            "foo/bar/baz/fstab.yaml not found in bucket 'helix-code-bus'"
        )
        assert fake_minio.write_calls == 0

    def test_path_not_mounted(self, make_usecase, code_bus):
        response = handle(make_usecase(), path="/other/page.md")

        assert response.status == 400
        assert response.header("x-error") == (
            "path specified is not mounted in fstab.yaml: /other/page.md"
        )

    def test_unknown_action(self, make_usecase, code_bus, storage_factory, upstream):
        """Test an unknown action opens no tenant storage and fetches nothing."""
        response = handle(make_usecase(), action="delete")

        assert response.status == 400
        assert response.header("x-error") == "Action unknown: delete"
        assert [s.bucket for s in storage_factory.created] == ["helix-code-bus"]
        assert upstream.requests == []

    def test_code_bus_is_read_only(self, make_usecase, code_bus, storage_factory):
        handle(make_usecase())

        code_storage = storage_factory.created[0]
        assert code_storage.bucket == "helix-code-bus"
        assert code_storage.read_only is True


class TestUpdate:
    def test_update_stores_document(self, make_usecase, code_bus, storage_factory, upstream):
        """Test a successful fetch is stored under live/<path>."""
        response = handle(make_usecase(), token="secret")

        assert response.status == 200
        assert response.body == b""

        stored = code_bus.buckets[TENANT_BUCKET]["live/mnt/example-post.md"]
        assert stored["headers"]["Content-Type"] == "text/markdown"
        assert stored["headers"]["x-amz-meta-x-source-last-modified"] == LAST_MODIFIED
        assert storage_factory(TENANT_BUCKET).load("live/mnt/example-post.md").data == b"hello"

        request = upstream.requests[0]
        assert request.headers["x-github-token"] == "secret"
        assert request.url.params["mpRelPath"] == "/example-post.md"
        assert request.url.params["mpType"] == "google"
        assert request.url.params["rid"] == "1234"

    def test_tenant_bucket_provisioned(self, make_usecase, code_bus):
        """Test the tenant bucket is tagged with its mount URL."""
        handle(make_usecase())

        tags = code_bus.bucket_tags[TENANT_BUCKET]
        assert tags["mountpoint"] == MOUNT_URL
        assert tags["team"] == "helix"

    def test_preview_prefix(self, make_usecase, code_bus):
        response = handle(make_usecase(), prefix="preview")

        assert response.status == 200
        assert "preview/mnt/example-post.md" in code_bus.buckets[TENANT_BUCKET]

    def test_not_found_upstream(self, make_usecase, code_bus, upstream):
        """Test an upstream 404 is returned and nothing is written."""
        upstream.status = 404
        upstream.headers = {"x-error": "document not found"}
        upstream.body = b""

        response = handle(make_usecase())

        assert response.status == 404
        assert response.header("x-error") == "document not found"
        assert "put_object" not in code_bus.calls

    def test_upstream_server_error(self, make_usecase, code_bus, upstream):
        upstream.status = 503
        upstream.headers = {"x-error": "unavailable"}

        response = handle(make_usecase())

        assert response.status == 502
        assert "put_object" not in code_bus.calls

    def test_use_last_modified(self, make_usecase, code_bus, storage_factory, upstream):
        """Test the stored modification time is sent and a 304 passes through."""
        storage_factory(TENANT_BUCKET).store(
            "live/mnt/example-post.md", b"old", {"last-modified": LAST_MODIFIED}
        )
        puts = code_bus.calls["put_object"]
        upstream.status = 304
        upstream.headers = {}
        upstream.body = b""

        response = handle(make_usecase(), useLastModified="true")

        assert response.status == 304
        assert upstream.requests[0].headers["if-modified-since"] == LAST_MODIFIED
        assert code_bus.calls["put_object"] == puts

    def test_last_modified_ignored_by_default(self, make_usecase, code_bus, storage_factory, upstream):
        storage_factory(TENANT_BUCKET).store(
            "live/mnt/example-post.md", b"old", {"last-modified": LAST_MODIFIED}
        )

        handle(make_usecase())

        assert "if-modified-since" not in upstream.requests[0].headers

    def test_upstream_timeout(self, make_usecase, code_bus, upstream):
        """Test a timeout is reported as 504."""
        upstream.error = lambda request: httpx.ReadTimeout("timed out", request=request)

        response = handle(make_usecase())

        assert response.status == 504
        assert "put_object" not in code_bus.calls

    def test_backend_failure(self, make_usecase, code_bus):
        """Test an unexpected storage error is a 500 and gets logged."""
        code_bus.tags_error = make_s3_error("AccessDenied", status=403)
        logger = MagicMock()

        response = handle(make_usecase(logger=logger))

        assert response.status == 500
        assert response.header("cache-control") == "no-store, private, must-revalidate"
        logger.exception.assert_called_once()


class TestPublish:
    def test_publish(self, make_usecase, code_bus, storage_factory, upstream):
        """Test publish copies preview to live without fetching."""
        storage_factory(TENANT_BUCKET).store(
            "preview/mnt/example-post.md", b"draft", {"content-type": "text/markdown"}
        )

        response = handle(make_usecase(), action="publish")

        assert response.status == 200
        assert storage_factory(TENANT_BUCKET).load("live/mnt/example-post.md").data == b"draft"
        assert upstream.requests == []

    def test_publish_missing_preview(self, make_usecase, code_bus):
        response = handle(make_usecase(), action="publish", path="/mnt/missing.md")

        assert response.status == 404
        assert response.header("x-error") == "source does not exist: preview/mnt/missing.md"
        assert "live/mnt/missing.md" not in code_bus.buckets.get(TENANT_BUCKET, {})


class TestLifecycle:
    @pytest.mark.parametrize("action", ["update", "publish", "delete"])
    def test_storages_closed(self, make_usecase, code_bus, storage_factory, action):
        """Test every storage client opened for a request gets closed."""
        closed = []

        def factory(bucket, tags=None, read_only=False):
            storage = storage_factory(bucket, tags, read_only)
            storage.close = lambda: closed.append(bucket)
            return storage

        usecase = make_usecase()
        usecase.storage_factory = factory

        handle(usecase, action=action)

        assert closed == [s.bucket for s in storage_factory.created]
        assert closed[0] == "helix-code-bus"
