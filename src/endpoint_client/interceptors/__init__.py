"""
Interceptors applied around every client call.
"""
from typing import Dict, List, Optional, Union

from .auth import AuthInjector, RotatingTokenCache, TokenProvider
from .base import Interceptor, InterceptorChain
from .headers import HeaderInjector
from .logger import RequestLogger
from .retry import RetrySignaler
from .timeout import TimeoutSetter


def default_interceptors(
    token_provider: Union[str, TokenProvider, None] = None,
    timeout: float = 10.0,
    headers: Optional[Dict[str, str]] = None,
) -> List[Interceptor]:
    """Build the reference interceptor list: auth, logging, retry, timeout, headers."""
    return [
        AuthInjector(token_provider),
        RequestLogger(),
        RetrySignaler(),
        TimeoutSetter(timeout),
        HeaderInjector(headers or {"User-Agent": "endpoint-client/0.1.0"}),
    ]


__all__ = [
    "Interceptor",
    "InterceptorChain",
    "AuthInjector",
    "RotatingTokenCache",
    "TokenProvider",
    "RequestLogger",
    "RetrySignaler",
    "TimeoutSetter",
    "HeaderInjector",
    "default_interceptors",
]
