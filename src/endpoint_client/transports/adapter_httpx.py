"""
Primary transport backed by httpx.AsyncClient.
"""
import logging
from typing import Any, AsyncIterator, Callable, Dict, Optional

import httpx

from ..config import ResolvedConfig, resolve_config
from ..errors import NetworkError, RequestFailedError
from ..types import HttpRequest, HttpResponse
from .base import Transport

logger = logging.getLogger(__name__)

LOG_PREFIX = "[HttpxTransport]"


async def _iter_with_progress(
    body: bytes,
    chunk_size: int,
    progress: Callable[[float], None],
) -> AsyncIterator[bytes]:
    """Yield `body` in chunks, reporting the sent fraction after each one."""
    total = len(body)
    sent = 0
    while sent < total:
        chunk = body[sent:sent + chunk_size]
        yield chunk
        sent += len(chunk)
        progress(sent / total)


class HttpxTransport(Transport):
    """Transport wrapping httpx.AsyncClient.

    Pass `client` to reuse a pre-configured httpx client; it is then not
    closed by `close()`.
    """

    def __init__(
        self,
        config: Optional[ResolvedConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or resolve_config()
        self._client: Optional[httpx.AsyncClient] = client
        # Flag to track if we own the client (created it)
        self._own_client = client is None

    @property
    def name(self) -> str:
        return "httpx"

    def supports_progress(self) -> bool:
        return True

    def get_client_kwargs(self) -> Dict[str, Any]:
        """Build kwargs for httpx client."""
        timeout = self._config.timeout
        kwargs: Dict[str, Any] = {
            "timeout": httpx.Timeout(
                connect=timeout.connect,
                read=timeout.read,
                write=timeout.write,
                pool=timeout.pool,
            ),
            "headers": self._config.headers,
            "follow_redirects": self._config.follow_redirects,
            "verify": self._config.verify_ssl,
            # We explicitly configure everything
            "trust_env": False,
        }
        if self._config.proxy_url:
            kwargs["proxy"] = self._config.proxy_url
        return kwargs

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs = self.get_client_kwargs()
            logger.debug(f"{LOG_PREFIX} Creating httpx.AsyncClient (follow_redirects={kwargs['follow_redirects']})")
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        """Close the client if we own it."""
        if self._own_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        request: HttpRequest,
        progress: Optional[Callable[[float], None]] = None,
    ) -> HttpResponse:
        client = self._get_client()
        headers = dict(request.headers)
        content: Any = request.body
        streamed = progress is not None and bool(request.body)

        if streamed:
            # Explicit length keeps httpx from switching to chunked encoding.
            if not request.has_header("Content-Length"):
                headers["Content-Length"] = str(len(request.body))
            content = _iter_with_progress(request.body, self._config.upload_chunk_size, progress)

        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if request.timeout is not None:
            timeout = httpx.Timeout(request.timeout)

        logger.debug(f"{LOG_PREFIX} Request: {request.method.value} {request.url}")
        try:
            response = await client.request(
                method=request.method.value,
                url=request.url,
                headers=headers,
                content=content,
                timeout=timeout,
            )
        except httpx.TransportError as e:
            logger.error(f"{LOG_PREFIX} Transport failure for {request.url}: {e}")
            raise NetworkError(e, request.url) from e
        except httpx.HTTPError as e:
            logger.error(f"{LOG_PREFIX} Request failed: {e}")
            raise RequestFailedError(e) from e

        if progress is not None and not streamed:
            progress(1.0)

        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=str(response.url),
        )
