"""
Content Bus - serverless entry point.
Decodes the platform event, wires config, logger, storage and content proxy,
and runs the handler once per invocation.
"""

import argparse
import base64
import json
import sys
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl

from config.config import Config, load_config
from pkg.logger.logger import Logger, LoggerConfig
from pkg.gzip.gzip import Gzip
from pkg.gzip.type import GzipConfig
from pkg.minio.interface import ICompressor, IObjectStorage
from pkg.minio.new import New as NewStorage
from pkg.minio.type import MinIOConfig
from pkg.zstd.type import ZstdConfig
from pkg.zstd.zstd import Zstd
from internal.content_bus import Config as ContentBusConfig
from internal.content_bus import HandlerRequest, NewContentBusUseCase, StorageFactory
from internal.content_proxy import Config as ContentProxyConfig
from internal.content_proxy import NewContentProxy
from internal.model.content import ContentResponse

STATUS_CHECK_PATH = "/_status_check/healthcheck.json"
REQUEST_ID_HEADERS = ("x-request-id", "x-cdn-request-id")


def build_storage_factory(config: Config) -> StorageFactory:
    """Storage clients share connection settings and codec, never a connection."""
    minio_config = MinIOConfig(
        endpoint=config.storage.endpoint,
        access_key=config.storage.access_key,
        secret_key=config.storage.secret_key,
        region=config.storage.region,
        secure=config.storage.secure,
    )
    compressor = build_compressor(config)

    def factory(
        bucket: str,
        tags: Optional[Mapping[str, str]] = None,
        read_only: bool = False,
    ) -> IObjectStorage:
        return NewStorage(
            minio_config,
            bucket,
            tags=tags,
            read_only=read_only,
            template_bucket=config.storage.template_bucket,
            compressor=compressor,
        )

    return factory


def build_compressor(config: Config) -> ICompressor:
    if config.compression.encoding == "zstd":
        return Zstd(ZstdConfig(default_level=config.compression.default_level))
    return Gzip(GzipConfig(level=config.compression.gzip_level))


@lru_cache(maxsize=1)
def get_runtime() -> Tuple[Config, Logger]:
    """Config and logger, built once per process and reused by warm invocations."""
    config = load_config()
    logger = Logger(
        LoggerConfig(
            level=config.logging.level,
            enable_console=config.logging.enable_console,
            colorize=config.logging.colorize,
            service_name=config.logging.service_name,
        )
    )
    return config, logger


def parse_event_params(event: Mapping[str, Any], headers: Mapping[str, str]) -> Dict[str, Any]:
    """Merge query string and body parameters; body values win."""
    params: Dict[str, Any] = dict(event.get("queryStringParameters") or {})

    body = event.get("body")
    if not body:
        return params
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")

    content_type = headers.get("content-type", "")
    if "application/json" in content_type:
        data = json.loads(body)
        if isinstance(data, dict):
            params.update(data)
    elif "application/x-www-form-urlencoded" in content_type:
        params.update(dict(parse_qsl(body)))
    return params


def to_platform_response(response: ContentResponse) -> Dict[str, Any]:
    try:
        return {
            "statusCode": response.status,
            "headers": response.headers,
            "body": response.body.decode("utf-8"),
        }
    except UnicodeDecodeError:
        return {
            "statusCode": response.status,
            "headers": response.headers,
            "body": base64.b64encode(response.body).decode("ascii"),
            "isBase64Encoded": True,
        }


def status_check(config: Config) -> Dict[str, Any]:
    return {
        "statusCode": 200,
        "headers": {"content-type": "application/json", "cache-control": "no-store"},
        "body": json.dumps({"status": "OK", "version": config.version}),
    }


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """Platform entry point (API Gateway proxy event in, proxy response out)."""
    config, logger = get_runtime()

    path = event.get("rawPath") or event.get("path") or ""
    if path.endswith(STATUS_CHECK_PATH):
        return status_check(config)

    headers = {name.lower(): value for name, value in (event.get("headers") or {}).items()}
    request_id = next(
        (headers[name] for name in REQUEST_ID_HEADERS if headers.get(name)),
        getattr(context, "aws_request_id", "") or "",
    )

    with logger.trace_context(request_id=request_id):
        try:
            params = parse_event_params(event, headers)
        except (ValueError, UnicodeDecodeError) as exc:
            logger.info(f"commands.handler: Unable to decode request body: {exc}")
            return to_platform_response(
                ContentResponse(status=400, headers={"x-error": "invalid request body"})
            )

        request = HandlerRequest(
            params=params,
            request_id=request_id,
            token=headers.get("x-github-token"),
        )

        content_proxy = NewContentProxy(
            ContentProxyConfig(
                url=config.content_proxy.url,
                timeout_ms=config.content_proxy.timeout_ms,
            ),
            logger=logger,
        )
        try:
            usecase = NewContentBusUseCase(
                ContentBusConfig(
                    code_bucket=config.storage.code_bucket,
                    bucket_prefix=config.storage.bucket_prefix,
                ),
                storage_factory=build_storage_factory(config),
                content_proxy=content_proxy,
                logger=logger,
            )
            response = usecase.handle(request)
        finally:
            content_proxy.close()

        logger.info(f"commands.handler: {params.get('action') or 'update'} -> {response.status}")
        return to_platform_response(response)


def main(argv: Optional[list] = None) -> int:
    """Run one invocation from the command line."""
    parser = argparse.ArgumentParser(description="Fetch a document into the content bus")
    parser.add_argument("--owner", required=True)
    parser.add_argument("--repo", required=True)
    parser.add_argument("--ref", required=True)
    parser.add_argument("--path", required=True)
    parser.add_argument("--prefix", default="live")
    parser.add_argument("--action", default="update", choices=["update", "publish"])
    parser.add_argument("--use-last-modified", action="store_true")
    parser.add_argument("--token", default=None)
    args = parser.parse_args(argv)

    params = {
        "owner": args.owner,
        "repo": args.repo,
        "ref": args.ref,
        "path": args.path,
        "prefix": args.prefix,
        "action": args.action,
        "useLastModified": args.use_last_modified,
    }
    headers = {"x-github-token": args.token} if args.token else {}
    result = handler({"queryStringParameters": params, "headers": headers})
    print(json.dumps(result, indent=2))
    return 0 if result["statusCode"] < 400 else 1


if __name__ == "__main__":
    sys.exit(main())
