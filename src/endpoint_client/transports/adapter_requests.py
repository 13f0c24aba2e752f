"""
Alternate transport backed by requests, run in a worker thread.
"""
import asyncio
import logging
import threading
from typing import Any, Callable, Dict, Optional

import requests

from ..config import ResolvedConfig, resolve_config
from ..errors import NetworkError, RequestFailedError
from ..types import HttpRequest, HttpResponse
from .base import Transport

logger = logging.getLogger(__name__)

LOG_PREFIX = "[RequestsTransport]"


class RequestsTransport(Transport):
    """Transport wrapping a blocking requests.Session.

    Each send runs in `asyncio.to_thread`. No byte-level progress: a supplied
    callback only receives 1.0 once the response arrives.

    Cancelling a send abandons the awaited future only. The worker thread
    still finishes the blocking HTTP call, bounded by the configured timeout,
    and its result is discarded.
    """

    def __init__(
        self,
        config: Optional[ResolvedConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self._config = config or resolve_config()
        self._session: Optional[requests.Session] = session
        self._own_session = session is None
        self._session_lock = threading.Lock()

    @property
    def name(self) -> str:
        return "requests"

    def supports_progress(self) -> bool:
        return False

    def _get_session(self) -> requests.Session:
        with self._session_lock:
            if self._session is None:
                session = requests.Session()
                session.headers.update(self._config.headers)
                session.trust_env = False
                self._session = session
            return self._session

    def get_request_kwargs(self, request: HttpRequest) -> Dict[str, Any]:
        """Build kwargs for Session.request."""
        if request.timeout is not None:
            timeout: Any = request.timeout
        else:
            timeout = (self._config.timeout.connect, self._config.timeout.read)
        kwargs: Dict[str, Any] = {
            "method": request.method.value,
            "url": request.url,
            "headers": dict(request.headers),
            "data": request.body,
            "timeout": timeout,
            "allow_redirects": self._config.follow_redirects,
            "verify": self._config.verify_ssl,
        }
        if self._config.proxy_url:
            kwargs["proxies"] = {"http": self._config.proxy_url, "https": self._config.proxy_url}
        return kwargs

    def _send_sync(self, session: requests.Session, request: HttpRequest) -> requests.Response:
        return session.request(**self.get_request_kwargs(request))

    async def send(
        self,
        request: HttpRequest,
        progress: Optional[Callable[[float], None]] = None,
    ) -> HttpResponse:
        logger.debug(f"{LOG_PREFIX} Request: {request.method.value} {request.url}")
        # Created on the event loop so concurrent sends share one session.
        session = self._get_session()
        try:
            response = await asyncio.to_thread(self._send_sync, session, request)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"{LOG_PREFIX} Transport failure for {request.url}: {e}")
            raise NetworkError(e, request.url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{LOG_PREFIX} Request failed: {e}")
            raise RequestFailedError(e) from e

        if progress is not None:
            progress(1.0)

        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            url=response.url or request.url,
        )

    async def close(self) -> None:
        if not self._own_session:
            return
        with self._session_lock:
            session, self._session = self._session, None
        if session is not None:
            session.close()
