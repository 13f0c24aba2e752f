"""
Interceptor interface and the ordered chain that applies interceptors.
"""
import logging
from typing import Iterable, Iterator, Tuple

from ..types import UNCHANGED, HttpRequest, HttpResponse, ResponseUpdate

logger = logging.getLogger(__name__)


class Interceptor:
    """Request/response transformer applied around every client call.

    Implementations must be stateless or synchronize their own state, since a
    single instance is shared by concurrent calls. They run synchronously and
    must not block.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    def transform_request(self, request: HttpRequest) -> HttpRequest:
        """Return the request to hand to the next interceptor."""
        return request

    def transform_response(self, request: HttpRequest, response: HttpResponse) -> ResponseUpdate:
        """Return a replacement response, or UNCHANGED to keep the current one."""
        return UNCHANGED

    def should_retry(self, response: HttpResponse) -> bool:
        """Whether the client should re-send the request after this response."""
        return False


class InterceptorChain:
    """Immutable ordered sequence of interceptors."""

    def __init__(self, interceptors: Iterable[Interceptor] = ()):
        self._interceptors: Tuple[Interceptor, ...] = tuple(interceptors)
        for interceptor in self._interceptors:
            if not isinstance(interceptor, Interceptor):
                raise TypeError(f"Expected Interceptor, got {type(interceptor).__name__}")

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __repr__(self) -> str:
        return f"InterceptorChain({[i.name for i in self._interceptors]})"

    def extended(self, *interceptors: Interceptor) -> "InterceptorChain":
        """New chain with `interceptors` appended."""
        return InterceptorChain(self._interceptors + tuple(interceptors))

    def apply_request(self, request: HttpRequest) -> HttpRequest:
        for interceptor in self._interceptors:
            request = interceptor.transform_request(request)
        return request

    def apply_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        for interceptor in self._interceptors:
            result = interceptor.transform_response(request, response)
            if result is None or result is UNCHANGED:
                continue
            if not isinstance(result, HttpResponse):
                raise TypeError(
                    f"{interceptor.name}.transform_response returned {type(result).__name__}"
                )
            response = result
        return response

    def wants_retry(self, response: HttpResponse) -> bool:
        signalled = [i.name for i in self._interceptors if i.should_retry(response)]
        if signalled:
            logger.debug(f"Retry signalled for status {response.status} by {signalled}")
        return bool(signalled)
