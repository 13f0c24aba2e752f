"""
High-level ApiClient facade.
"""
import asyncio
import logging
from typing import Callable, Iterable, Optional, Type, TypeVar, Union

from .config import ClientConfig, ResolvedConfig, resolve_config
from .decoding import Decoder, decode_body
from .endpoint import Endpoint
from .errors import ClientError, RequestFailedError, StatusCodeError
from .interceptors.base import Interceptor, InterceptorChain
from .transports.adapter_httpx import HttpxTransport
from .transports.adapter_requests import RequestsTransport
from .transports.base import Transport
from .types import HttpRequest, HttpResponse, ProgressCallback, as_progress_callback

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Constants
LOG_PREFIX = "[ApiClient]"


class _MonotonicProgress:
    """Forwards progress fractions clamped to [0, 1], dropping any that go backwards."""

    def __init__(self, callback: Callable[[float], None]):
        self._callback = callback
        self._last = 0.0

    def __call__(self, fraction: float) -> None:
        fraction = min(max(fraction, 0.0), 1.0)
        if fraction < self._last:
            return
        self._last = fraction
        self._callback(fraction)


class ApiClient:
    """
    Performs endpoint requests through an interceptor chain and a transport.

    Holds only state fixed at construction (config, interceptor chain,
    transports), so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        interceptors: Union[InterceptorChain, Iterable[Interceptor]] = (),
        transport: Optional[Transport] = None,
        alternate_transport: Optional[Transport] = None,
    ):
        self._config: ResolvedConfig = resolve_config(config)
        self._chain = (
            interceptors if isinstance(interceptors, InterceptorChain) else InterceptorChain(interceptors)
        )
        self._transport = transport or HttpxTransport(self._config)
        self._alternate_transport = alternate_transport or RequestsTransport(self._config)
        # Only transports we created are closed by close()
        self._owned = []
        if transport is None:
            self._owned.append(self._transport)
        if alternate_transport is None:
            self._owned.append(self._alternate_transport)

    @classmethod
    def create(
        cls,
        config: Optional[ClientConfig] = None,
        interceptors: Union[InterceptorChain, Iterable[Interceptor]] = (),
    ) -> "ApiClient":
        """Factory method to create a client."""
        return cls(config=config, interceptors=interceptors)

    @property
    def interceptors(self) -> InterceptorChain:
        return self._chain

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    async def close(self) -> None:
        """Close transports created by this client.

        Every owned transport is closed; the first failure is re-raised after.
        """
        errors = []
        for transport in self._owned:
            try:
                await transport.close()
            except Exception as e:
                logger.error(f"{LOG_PREFIX} Failed to close {transport.name} transport: {e}")
                errors.append(e)
        if errors:
            raise errors[0]

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(
        self,
        endpoint: Endpoint,
        response_type: Type[T],
        *,
        decoder: Optional[Decoder] = None,
    ) -> T:
        """Send the request and decode the JSON body into `response_type`."""
        response = await self._perform(endpoint, self._transport)
        return decode_body(response.body, response_type, decoder)

    async def request_void(self, endpoint: Endpoint) -> None:
        """Send the request; only success or failure matters."""
        await self._perform(endpoint, self._transport)

    async def request_with_progress(
        self,
        endpoint: Endpoint,
        progress: Optional[ProgressCallback] = None,
    ) -> Optional[bytes]:
        """
        Send the request, reporting upload progress to `progress`.

        Returns the raw response body, or None when the successful response
        has no body.
        """
        callback = as_progress_callback(progress)
        if callback is not None:
            callback = _MonotonicProgress(callback)
        response = await self._perform(endpoint, self._transport, progress=callback)
        return response.body or None

    async def request_data(self, endpoint: Endpoint) -> Optional[bytes]:
        """Raw response body without progress reporting."""
        return await self.request_with_progress(endpoint, None)

    async def request_alternate(
        self,
        endpoint: Endpoint,
        response_type: Type[T],
        *,
        decoder: Optional[Decoder] = None,
    ) -> T:
        """Same as `request`, routed through the alternate transport."""
        response = await self._perform(endpoint, self._alternate_transport)
        return decode_body(response.body, response_type, decoder)

    async def _perform(
        self,
        endpoint: Endpoint,
        transport: Transport,
        progress: Optional[Callable[[float], None]] = None,
    ) -> HttpResponse:
        retry = self._config.retry
        attempt = 0
        while True:
            # Resolution errors surface before any network I/O.
            request = self._chain.apply_request(endpoint.resolve())
            response = await self._send(transport, request, progress)
            response = self._chain.apply_response(request, response)

            if attempt >= retry.max_retries or not self._chain.wants_retry(response):
                break
            delay = retry.delay_for(attempt)
            attempt += 1
            logger.warning(
                f"{LOG_PREFIX} Retrying {request.method.value} {request.url} after status "
                f"{response.status} (attempt {attempt}/{retry.max_retries}, backoff {delay:.2f}s)"
            )
            await asyncio.sleep(delay)

        if self._config.debug:
            logger.debug(f"{LOG_PREFIX} Received HTTP response: {response.status} {response.url or request.url}")

        if not 200 <= response.status <= 299:
            raise StatusCodeError(response.status, response.body, response.url or request.url)
        return response

    async def _send(
        self,
        transport: Transport,
        request: HttpRequest,
        progress: Optional[Callable[[float], None]],
    ) -> HttpResponse:
        try:
            return await transport.send(request, progress)
        except ClientError:
            raise
        except Exception as e:
            logger.error(f"{LOG_PREFIX} {transport.name} transport raised {type(e).__name__}: {e}")
            raise RequestFailedError(e) from e
