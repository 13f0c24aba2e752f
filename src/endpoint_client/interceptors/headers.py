from typing import Dict

from ..types import HttpRequest
from .base import Interceptor


class HeaderInjector(Interceptor):
    """Adds fixed headers, leaving headers already on the request untouched."""

    def __init__(self, headers: Dict[str, str]):
        self._headers = dict(headers)

    def transform_request(self, request: HttpRequest) -> HttpRequest:
        for key, value in self._headers.items():
            if not request.has_header(key):
                request = request.with_header(key, value)
        return request
