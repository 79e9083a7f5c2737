from typing import Optional

import httpx

from pkg.logger.logger import Logger
from internal.model.content import ContentResponse
from ..constant import (
    ERROR_CACHE_CONTROL,
    HEADER_CACHE_CONTROL,
    HEADER_ERROR,
    PASSTHROUGH_HEADERS,
)
from ..errors import ErrUpstreamUnavailable
from ..interface import IContentProxy
from ..type import Config, FetchInput
from .helpers import (
    create_url,
    log_level_for_status,
    propagate_status_code,
    request_headers,
)


class ContentProxyUseCase(IContentProxy):
    """Fetches documents from the content proxy service.

    Upstream answers are normalized into a ContentResponse: successes keep
    the body and a few headers, failures carry the upstream error text in
    ``x-error`` and a short-lived cache-control.
    """

    def __init__(
        self,
        config: Config,
        logger: Optional[Logger] = None,
        client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config
        self.logger = logger
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(config.timeout_ms / 1000.0),
            follow_redirects=True,
            transport=transport,
        )

    def fetch(self, input_data: FetchInput) -> ContentResponse:
        url = create_url(self.config.url, input_data)
        if self.logger:
            self.logger.info(f"internal.content_proxy.usecase: Fetching content from: {url}")

        try:
            resp = self._client.get(url, headers=request_headers(input_data))
        except httpx.TimeoutException as exc:
            raise ErrUpstreamUnavailable(f"Timeout fetching {url}: {exc}") from exc
        except (httpx.NetworkError, httpx.RemoteProtocolError) as exc:
            raise ErrUpstreamUnavailable(f"Unable to fetch {url}: {exc}") from exc

        if resp.is_success:
            headers = {
                name: resp.headers[name]
                for name in PASSTHROUGH_HEADERS
                if resp.headers.get(name)
            }
            return ContentResponse(status=200, headers=headers, body=resp.content)

        error = resp.headers.get(HEADER_ERROR, "")
        if self.logger:
            self.logger.log(
                log_level_for_status(resp.status_code),
                f"internal.content_proxy.usecase: Unable to fetch {url} ({resp.status_code}): {error}",
            )
        return ContentResponse(
            status=propagate_status_code(resp.status_code),
            headers={
                HEADER_ERROR: error,
                HEADER_CACHE_CONTROL: ERROR_CACHE_CONTROL,
            },
            body=resp.content,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
