"""
Endpoint Client - endpoint descriptors, interceptors and an async HTTP facade
"""

__version__ = "0.1.0"

from .client import ApiClient
from .config import ClientConfig, ResolvedConfig, RetryPolicy, TimeoutConfig, resolve_config
from .encoding import MultipartSpec, encode_json, new_boundary
from .endpoint import ApiVersion, Endpoint, EndpointDescriptor
from .errors import (
    ClientError,
    DecodingFailedError,
    ErrorKind,
    InvalidURLError,
    NetworkError,
    RequestFailedError,
    StatusCodeError,
)
from .interceptors import (
    AuthInjector,
    HeaderInjector,
    Interceptor,
    InterceptorChain,
    RequestLogger,
    RetrySignaler,
    RotatingTokenCache,
    TimeoutSetter,
    default_interceptors,
)
from .transports import HttpxTransport, RequestsTransport, Transport, get_transport, register_transport
from .types import UNCHANGED, HttpMethod, HttpRequest, HttpResponse, ProgressDelegate

__all__ = [
    "ApiClient",
    "ClientConfig", "ResolvedConfig", "RetryPolicy", "TimeoutConfig", "resolve_config",
    "MultipartSpec", "encode_json", "new_boundary",
    "ApiVersion", "Endpoint", "EndpointDescriptor",
    "ClientError", "ErrorKind", "InvalidURLError", "NetworkError", "StatusCodeError",
    "DecodingFailedError", "RequestFailedError",
    "Interceptor", "InterceptorChain", "AuthInjector", "RotatingTokenCache", "RequestLogger",
    "RetrySignaler", "TimeoutSetter", "HeaderInjector", "default_interceptors",
    "Transport", "HttpxTransport", "RequestsTransport", "get_transport", "register_transport",
    "UNCHANGED", "HttpMethod", "HttpRequest", "HttpResponse", "ProgressDelegate",
]
