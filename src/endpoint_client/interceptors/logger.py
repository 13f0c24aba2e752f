"""
Debug request/response logging.
"""
import json
import logging
from typing import Any, Dict, Optional

from ..config import is_debug_enabled
from ..types import UNCHANGED, HttpRequest, HttpResponse, ResponseUpdate
from .auth import _mask_value
from .base import Interceptor

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[EndpointClient]"
MAX_BODY_PREVIEW = 5000
SENSITIVE_HEADERS = ("authorization", "proxy-authorization", "x-api-key", "cookie", "set-cookie")


def _format_body(body: Any) -> str:
    """
    Format body for logging safeguards against binary data.
    """
    if body is None:
        return "<empty>"
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    if isinstance(body, str):
        try:
            # Try to pretty print if it looks like JSON
            if body.strip().startswith(("{", "[")):
                return json.dumps(json.loads(body), indent=2)
        except json.JSONDecodeError:
            pass
        # Truncate long strings
        if len(body) > MAX_BODY_PREVIEW:
            return body[:MAX_BODY_PREVIEW] + "... (truncated)"
        return body
    if isinstance(body, dict):
        return json.dumps(body, indent=2)
    return str(body)


def _safe_headers(headers: Dict[str, str]) -> Dict[str, str]:
    return {
        k: _mask_value(v) if k.lower() in SENSITIVE_HEADERS else v
        for k, v in headers.items()
    }


class RequestLogger(Interceptor):
    """Logs outgoing requests and incoming responses.

    Side-effect only. Disabled unless debug is enabled (see `is_debug_enabled`).
    """

    def __init__(self, enabled: Optional[bool] = None, log: Optional[logging.Logger] = None):
        self._enabled = is_debug_enabled(enabled)
        self._log = log or logger

    @property
    def enabled(self) -> bool:
        return self._enabled

    def transform_request(self, request: HttpRequest) -> HttpRequest:
        if self._enabled:
            self._log.debug(f"{LOG_PREFIX} Request: {request.method.value} {request.url}")
            self._log.debug(f"{LOG_PREFIX} Headers: {_safe_headers(request.headers)}")
            if request.body is not None:
                self._log.debug(f"{LOG_PREFIX} Body: {_format_body(request.body)}")
        return request

    def transform_response(self, request: HttpRequest, response: HttpResponse) -> ResponseUpdate:
        if self._enabled:
            self._log.debug(f"{LOG_PREFIX} Response: {response.status} {response.url or request.url}")
            if response.body:
                self._log.debug(f"{LOG_PREFIX} Response Body: {_format_body(response.body)}")
        return UNCHANGED
