from __future__ import annotations

import io
import json
import zlib
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import boto3
import urllib3
from botocore.config import Config as BotoConfig
from minio import Minio  # type: ignore
from minio.commonconfig import CopySource, Tags  # type: ignore
from minio.credentials import ChainedProvider, EnvAWSProvider, IamAwsProvider  # type: ignore
from minio.error import S3Error  # type: ignore
import zstandard as zstd  # type: ignore

from loguru import logger
from pkg.gzip.gzip import Gzip
from pkg.zstd.zstd import Zstd
from .interface import ICompressor, IObjectStorage
from .mapping import split_headers
from .type import MinIOConfig, StorageResult, StorageState
from .constant import (
    CONTENT_TYPE_HEADER,
    CONTENT_ENCODING_HEADER,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_ENDPOINT,
    DEFAULT_TEMPLATE_BUCKET,
    ENCODING_GZIP,
    ENCODING_ZSTD,
    ERR_NO_SUCH_KEY,
    ERROR_BUCKET_REQUIRED,
    ERROR_READ_ONLY,
    ERROR_SOURCE_NOT_FOUND,
    EXPIRES_HEADER,
    NOT_FOUND_CODES,
    PUBLIC_ACCESS_BLOCK_SID,
    SYSTEM_HEADER_PARAMS,
    USER_METADATA_PREFIX,
    WRITER_MAX_ATTEMPTS,
)


class MinioAdapterError(Exception):
    """Base exception for object store operations."""

    pass


class ErrReadOnlyStorage(MinioAdapterError):
    """Raised when a write is attempted on a read-only client."""

    pass


class MinioDecompressionError(MinioAdapterError):
    """Raised when a stored payload cannot be decoded."""

    pass


class MinioStorage(IObjectStorage):
    """Storage client bound to a single bucket.

    The bucket is provisioned on first use: ``ensure_ready()`` runs at the top
    of every operation and creates the bucket (tagged and closed to anonymous
    access) the first time, unless the client is read-only. Payloads are
    gzip-compressed on ``store`` and decompressed on ``load``; callers never
    see compressed bytes.

    Reads, raw writes and copies go through minio. ``store`` goes through a
    boto3 S3 client, because minio sends any header it does not know, such
    as ``Expires``, as user metadata.

    Attributes:
        config: Connection configuration
        tags: Tags added to the bucket when it gets created
        read_only: Whether writes and bucket creation are forbidden
        template_bucket: Bucket whose tags seed new buckets
    """

    def __init__(
        self,
        config: MinIOConfig,
        bucket: str,
        *,
        tags: Optional[Mapping[str, str]] = None,
        read_only: bool = False,
        template_bucket: str = DEFAULT_TEMPLATE_BUCKET,
        compressor: Optional[ICompressor] = None,
        client: Optional[Minio] = None,
        writer: Optional[Any] = None,
    ):
        if not bucket:
            raise ValueError(ERROR_BUCKET_REQUIRED)

        self.config = config
        self.tags = dict(tags or {})
        self.read_only = read_only
        self.template_bucket = template_bucket
        self._bucket = bucket
        self._codec = compressor or Gzip()
        self._decoders: Dict[str, ICompressor] = {ENCODING_GZIP: Gzip(), ENCODING_ZSTD: Zstd()}
        self._decoders[self._codec.encoding] = self._codec
        self._state = StorageState.UNINITIALIZED

        # Only set when this instance builds its own minio client
        self._http: Optional[urllib3.PoolManager] = None
        self._client = client or self._create_client()

        self._writer = writer
        self._owns_writer = writer is None

    def _create_client(self) -> Minio:
        # Own the connection pool so close() can release it
        self._http = urllib3.PoolManager(maxsize=10, retries=False)

        if self.config.has_static_credentials:
            logger.info("Creating S3 client with credentials")
            return Minio(
                self.config.endpoint,
                access_key=self.config.access_key,
                secret_key=self.config.secret_key,
                region=self.config.region,
                secure=self.config.secure,
                http_client=self._http,
            )

        logger.info("Creating S3 client without credentials")
        return Minio(
            self.config.endpoint,
            region=self.config.region,
            secure=self.config.secure,
            http_client=self._http,
            credentials=ChainedProvider([EnvAWSProvider(), IamAwsProvider()]),
        )

    def _create_writer(self) -> Any:
        session = boto3.Session(region_name=self.config.region)
        kwargs: Dict[str, Any] = {}
        if self.config.endpoint != DEFAULT_ENDPOINT:
            scheme = "https" if self.config.secure else "http"
            kwargs["endpoint_url"] = f"{scheme}://{self.config.endpoint}"
        if self.config.has_static_credentials:
            kwargs["aws_access_key_id"] = self.config.access_key
            kwargs["aws_secret_access_key"] = self.config.secret_key

        return session.client(
            "s3",
            region_name=self.config.region,
            config=BotoConfig(
                retries={"max_attempts": WRITER_MAX_ATTEMPTS, "mode": "standard"},
                s3={"addressing_style": "path"},
                request_checksum_calculation="when_required",
            ),
            **kwargs,
        )

    @property
    def writer(self) -> Any:
        """boto3 S3 client used by ``store``, created on first access."""
        if self._writer is None:
            self._writer = self._create_writer()
        return self._writer

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def client(self) -> Minio:
        return self._client

    @property
    def state(self) -> StorageState:
        return self._state

    def ensure_ready(self) -> None:
        """Provision the bucket on first use. Later calls are no-ops."""
        if self._state == StorageState.INITIALIZED:
            return
        if not self.read_only:
            self.ensure_bucket_exists()
        self._state = StorageState.INITIALIZED

    def ensure_bucket_exists(self) -> bool:
        """Create the bucket if it does not exist yet.

        The template bucket's tags are read before anything is created; a
        failure to read them is a configuration error and propagates.

        Returns:
            True if the bucket was created by this call.
        """
        if self._client.bucket_exists(self._bucket):
            return False
        if self.read_only:
            logger.warning(f"Bucket {self._bucket} does not exist (read-only, not created)")
            return False

        tags = self._bucket_tags()

        self._client.make_bucket(self._bucket, location=self.config.region)
        logger.info(f"Bucket created: {self._bucket}")

        self._client.set_bucket_policy(self._bucket, self._public_access_block_policy())
        if tags:
            self._client.set_bucket_tags(self._bucket, tags)
            logger.info(f"Bucket {self._bucket} tagged with {sorted(tags.keys())}")
        return True

    def _bucket_tags(self) -> Tags:
        template = self._client.get_bucket_tags(self.template_bucket)
        tags = Tags.new_bucket_tags()
        for key, value in (template or {}).items():
            tags[key] = value
        for key, value in self.tags.items():
            tags[key] = value
        return tags

    def _public_access_block_policy(self) -> str:
        return json.dumps(
            {
                "Version": "2012-10-17",
                "Statement": [
                    {
                        "Sid": PUBLIC_ACCESS_BLOCK_SID,
                        "Effect": "Deny",
                        "Principal": "*",
                        "Action": "s3:*",
                        "Resource": [
                            f"arn:aws:s3:::{self._bucket}",
                            f"arn:aws:s3:::{self._bucket}/*",
                        ],
                        "Condition": {
                            "StringEquals": {"aws:PrincipalType": "Anonymous"}
                        },
                    }
                ],
            }
        )

    def _check_writable(self) -> None:
        if self.read_only:
            raise ErrReadOnlyStorage(ERROR_READ_ONLY.format(bucket=self._bucket))

    def load(self, key: str) -> StorageResult:
        """Return an object's contents, decompressed.

        Args:
            key: Object key

        Returns:
            StorageResult with ``data`` set, or NOT_FOUND.

        Raises:
            MinioDecompressionError: If the stored payload cannot be decoded.
            S3Error: For any backend failure other than absence.
        """
        self.ensure_ready()

        response = None
        try:
            response = self._client.get_object(self._bucket, key)
            # Raw bytes: the transport must not undo our content encoding
            raw = response.read(decode_content=False)
            encoding = (response.headers.get(CONTENT_ENCODING_HEADER) or "").lower()
        except S3Error as exc:
            if exc.code in NOT_FOUND_CODES:
                return StorageResult.not_found(key)
            raise
        finally:
            if response is not None:
                response.close()
                response.release_conn()

        logger.info(f"Object downloaded from: {self._bucket}/{key}")
        return StorageResult.ok(key, data=self._decode(raw, encoding, key))

    def _decode(self, raw: bytes, encoding: str, key: str) -> bytes:
        decoder = self._decoders.get(encoding)
        if decoder is None:
            return raw
        try:
            return decoder.decompress(raw)
        except (zstd.ZstdError, zlib.error, OSError, EOFError) as exc:
            raise MinioDecompressionError(
                f"Failed to decode {self._bucket}/{key} ({encoding}): {exc}"
            ) from exc

    def metadata(self, key: str) -> StorageResult:
        """Return an object's user metadata without downloading it."""
        self.ensure_ready()

        try:
            stat = self._client.stat_object(self._bucket, key)
        except S3Error as exc:
            if exc.code in NOT_FOUND_CODES:
                return StorageResult.not_found(key)
            raise

        logger.info(f"Object metadata loaded for: {self._bucket}/{key}")
        return StorageResult.ok(key, metadata=_user_metadata((stat.metadata or {}).items()))

    def store(self, key: str, body: bytes, headers: Mapping[str, str]) -> None:
        """Compress and store a response body along with its headers.

        content-type, cache-control and expires become object attributes; all
        other headers are stored as user metadata. Existing objects are
        overwritten. An expires value that is not an HTTP date is dropped.

        Raises:
            ErrReadOnlyStorage: If the client is read-only.
        """
        self._check_writable()
        self.ensure_ready()

        system, metadata = split_headers(headers)
        zipped = self._codec.compress(body)

        params: Dict[str, Any] = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": zipped,
            "ContentType": system.pop(CONTENT_TYPE_HEADER, DEFAULT_CONTENT_TYPE),
            "ContentEncoding": self._codec.encoding,
            "Metadata": metadata,
        }
        expires = system.pop(EXPIRES_HEADER, None)
        if expires is not None:
            try:
                params["Expires"] = parsedate_to_datetime(expires)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid Expires for {self._bucket}/{key}: {expires!r}")
        for name, value in system.items():
            params[SYSTEM_HEADER_PARAMS[name]] = value

        self.writer.put_object(**params)
        logger.info(
            f"Object uploaded to: {self._bucket}/{key} ({len(body)} -> {len(zipped)} bytes)"
        )

    def store_data(
        self,
        key: str,
        data: bytes,
        content_type: str = DEFAULT_CONTENT_TYPE,
        metadata: Optional[Dict[str, str]] = None,
    ) -> None:
        """Store raw bytes as-is, with an explicit content type and metadata."""
        self._check_writable()
        self.ensure_ready()

        self._client.put_object(
            self._bucket,
            key,
            io.BytesIO(data),
            length=len(data),
            content_type=content_type,
            metadata={
                USER_METADATA_PREFIX + name.lower(): value
                for name, value in (metadata or {}).items()
            },
        )
        logger.info(f"Object uploaded to: {self._bucket}/{key}")

    def copy(self, src_key: str, dest_key: str) -> StorageResult:
        """Copy an object, attributes included, within the bucket.

        Returns:
            StorageResult for ``dest_key``, or NOT_FOUND for a missing source.

        Raises:
            ErrReadOnlyStorage: If the client is read-only.
        """
        self._check_writable()
        self.ensure_ready()

        try:
            self._client.copy_object(
                self._bucket, dest_key, CopySource(self._bucket, src_key)
            )
        except S3Error as exc:
            if exc.code != ERR_NO_SUCH_KEY:
                raise
            return StorageResult.not_found(
                src_key, ERROR_SOURCE_NOT_FOUND.format(key=src_key)
            )

        logger.info(f"Object copied from {src_key} to: {self._bucket}/{dest_key}")
        return StorageResult.ok(dest_key)

    def close(self) -> None:
        """Release pooled connections. Safe to call at any time."""
        if self._http is not None:
            self._http.clear()
        if self._owns_writer and self._writer is not None:
            self._writer.close()
            self._writer = None


def _user_metadata(headers: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for name, value in headers:
        lower = name.lower()
        if lower.startswith(USER_METADATA_PREFIX):
            result[lower[len(USER_METADATA_PREFIX):]] = value
    return result


__all__ = [
    "MinioStorage",
    "MinioAdapterError",
    "ErrReadOnlyStorage",
    "MinioDecompressionError",
]
