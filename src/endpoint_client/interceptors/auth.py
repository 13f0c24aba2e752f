"""
Bearer token injection.
"""
import logging
import threading
import time
from typing import Callable, Optional, Union

from ..types import HttpRequest
from .base import Interceptor

logger = logging.getLogger(__name__)
LOG_PREFIX = "[AUTH]"

TokenProvider = Callable[[], Optional[str]]


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 10 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 10:
        return "*" * len(val)
    return val[:10] + "*" * (len(val) - 10)


class RotatingTokenCache:
    """Thread-safe token provider that refreshes its token after `ttl_seconds`.

    `fetch_token` is called at most once per expiry, under a lock.
    """

    def __init__(
        self,
        fetch_token: TokenProvider,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch_token = fetch_token
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._expires_at = 0.0

    def __call__(self) -> Optional[str]:
        with self._lock:
            now = self._clock()
            if self._token is None or now >= self._expires_at:
                self._token = self._fetch_token()
                self._expires_at = now + self._ttl_seconds
                logger.debug(f"{LOG_PREFIX} RotatingTokenCache refreshed token={_mask_value(self._token)}")
            return self._token

    def invalidate(self) -> None:
        with self._lock:
            self._token = None


class AuthInjector(Interceptor):
    """Adds `Authorization: Bearer <token>` when the provider yields a token."""

    def __init__(
        self,
        token_provider: Union[str, TokenProvider, None],
        header_name: str = "Authorization",
        scheme: str = "Bearer",
    ):
        if token_provider is None or isinstance(token_provider, str):
            static_token = token_provider
            self._token_provider: TokenProvider = lambda: static_token
        else:
            self._token_provider = token_provider
        self._header_name = header_name
        self._scheme = scheme

    def transform_request(self, request: HttpRequest) -> HttpRequest:
        token = self._token_provider()
        if not token:
            return request
        value = f"{self._scheme} {token}" if self._scheme else token
        logger.debug(f"{LOG_PREFIX} AuthInjector: {self._header_name}={_mask_value(value)}")
        return request.with_header(self._header_name, value)
