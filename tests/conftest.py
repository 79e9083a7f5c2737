"""Shared pytest fixtures.

Provides an in-memory stand-in for the minio client so that storage and
handler tests run without an object store.
"""

from email.utils import format_datetime
from typing import Dict, Optional
from unittest.mock import MagicMock

import pytest
from minio.error import S3Error

from pkg.minio.minio import MinioStorage
from pkg.minio.type import MinIOConfig

# Headers minio forwards as-is; every other metadata key, Expires included,
# gets the user prefix
_NATIVE_HEADERS = (
    "cache-control",
    "content-disposition",
    "content-encoding",
    "content-language",
    "content-type",
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring external services"
    )


def make_s3_error(code: str, status: int = 404) -> S3Error:
    response = MagicMock()
    response.status = status
    return S3Error(
        code=code,
        message=f"{code} raised by fake",
        resource="/",
        request_id="fake-request",
        host_id="fake-host",
        response=response,
    )


class FakeObjectResponse:
    """Mimics the urllib3 response returned by Minio.get_object."""

    def __init__(self, data: bytes, headers: Dict[str, str]):
        self._data = data
        self.headers = headers
        self.closed = False
        self.released = False

    def read(self, amt=None, decode_content=None):
        return self._data

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


class FakeStat:
    def __init__(self, headers: Dict[str, str]):
        self.metadata = headers


class FakeMinio:
    """In-memory minio client with call counters."""

    def __init__(self):
        self.buckets: Dict[str, Dict[str, dict]] = {}
        self.bucket_tags: Dict[str, Optional[Dict[str, str]]] = {}
        self.policies: Dict[str, str] = {}
        self.calls: Dict[str, int] = {}
        self.tags_error: Optional[Exception] = None

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1

    @property
    def write_calls(self) -> int:
        return sum(
            self.calls.get(name, 0)
            for name in ("make_bucket", "set_bucket_policy", "set_bucket_tags", "put_object", "copy_object")
        )

    def add_bucket(self, bucket: str, tags: Optional[Dict[str, str]] = None) -> None:
        self.buckets.setdefault(bucket, {})
        self.bucket_tags[bucket] = tags

    def bucket_exists(self, bucket):
        self._count("bucket_exists")
        return bucket in self.buckets

    def make_bucket(self, bucket, location=None):
        self._count("make_bucket")
        self.buckets[bucket] = {}

    def set_bucket_policy(self, bucket, policy):
        self._count("set_bucket_policy")
        self.policies[bucket] = policy

    def get_bucket_tags(self, bucket):
        self._count("get_bucket_tags")
        if self.tags_error is not None:
            raise self.tags_error
        if bucket not in self.buckets:
            raise make_s3_error("NoSuchBucket")
        return self.bucket_tags.get(bucket)

    def set_bucket_tags(self, bucket, tags):
        self._count("set_bucket_tags")
        self.bucket_tags[bucket] = dict(tags)

    def _objects(self, bucket) -> Dict[str, dict]:
        if bucket not in self.buckets:
            raise make_s3_error("NoSuchBucket")
        return self.buckets[bucket]

    def _object(self, bucket, name) -> dict:
        objects = self._objects(bucket)
        if name not in objects:
            raise make_s3_error("NoSuchKey")
        return objects[name]

    def put_object(self, bucket, name, data, length, content_type="application/octet-stream", metadata=None):
        self._count("put_object")
        headers = {"Content-Type": content_type}
        for key, value in (metadata or {}).items():
            lower = key.lower()
            if lower.startswith("x-amz-") or lower in _NATIVE_HEADERS:
                headers[key] = value
            else:
                headers["x-amz-meta-" + key] = value
        self._objects(bucket)[name] = {"data": data.read(length), "headers": headers}

    def get_object(self, bucket, name):
        self._count("get_object")
        obj = self._object(bucket, name)
        return FakeObjectResponse(obj["data"], dict(obj["headers"]))

    def stat_object(self, bucket, name):
        self._count("stat_object")
        obj = self._object(bucket, name)
        return FakeStat(dict(obj["headers"]))

    def copy_object(self, bucket, name, source):
        self._count("copy_object")
        obj = self._object(source.bucket_name, source.object_name)
        self._objects(bucket)[name] = {"data": obj["data"], "headers": dict(obj["headers"])}


class FakeS3Writer:
    """Mimics the boto3 S3 client's put_object on top of a FakeMinio store.

    Parameters are stored the way S3 returns them: system attributes under
    their header names and Metadata under the user prefix.
    """

    def __init__(self, store: FakeMinio):
        self.store = store
        self.requests = []
        self.closed = False

    def put_object(self, Bucket, Key, Body, Metadata=None, **params):
        self.store._count("put_object")
        self.requests.append(dict(params, Bucket=Bucket, Key=Key, Metadata=Metadata))
        headers = {"Content-Type": params.get("ContentType", "binary/octet-stream")}
        if "ContentEncoding" in params:
            headers["Content-Encoding"] = params["ContentEncoding"]
        if "CacheControl" in params:
            headers["Cache-Control"] = params["CacheControl"]
        if "Expires" in params:
            headers["Expires"] = format_datetime(params["Expires"], usegmt=True)
        for name, value in (Metadata or {}).items():
            headers["x-amz-meta-" + name] = value
        self.store._objects(Bucket)[Key] = {"data": bytes(Body), "headers": headers}
        return {"ETag": '"fake"'}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_minio():
    """Fresh in-memory object store with the tag template bucket in place."""
    fake = FakeMinio()
    fake.add_bucket("helix-content-bus", tags={"team": "helix", "cost-center": "cb"})
    return fake


@pytest.fixture
def fake_writer(fake_minio):
    return FakeS3Writer(fake_minio)


@pytest.fixture
def minio_config():
    return MinIOConfig(region="us-east-1", access_key="bar", secret_key="baz")


@pytest.fixture
def storage_factory(fake_minio, fake_writer, minio_config):
    """Factory with the (bucket, tags, read_only) signature used by the handler.

    Every created client is recorded in ``factory.created``.
    """

    def factory(bucket, tags=None, read_only=False):
        storage = MinioStorage(
            minio_config,
            bucket,
            tags=tags,
            read_only=read_only,
            client=fake_minio,
            writer=fake_writer,
        )
        factory.created.append(storage)
        return storage

    factory.created = []
    return factory
