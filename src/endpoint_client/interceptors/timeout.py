from ..types import HttpRequest
from .base import Interceptor


class TimeoutSetter(Interceptor):
    """Applies a transport timeout (seconds) to every request passing through."""

    def __init__(self, timeout: float):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = float(timeout)

    @property
    def timeout(self) -> float:
        return self._timeout

    def transform_request(self, request: HttpRequest) -> HttpRequest:
        return request.with_timeout(self._timeout)
