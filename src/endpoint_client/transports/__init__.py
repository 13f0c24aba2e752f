"""
Transport registry.
"""
import logging
from typing import Dict, Optional, Type

from ..config import ResolvedConfig
from .adapter_httpx import HttpxTransport
from .adapter_requests import RequestsTransport
from .base import Transport

logger = logging.getLogger(__name__)

_transports: Dict[str, Type[Transport]] = {}


def register_transport(transport_cls: Type[Transport]) -> None:
    """Register a transport class under its `name`."""
    name = transport_cls().name
    _transports[name] = transport_cls
    logger.debug(f"Registered transport: {name}")


def get_transport(name: str, config: Optional[ResolvedConfig] = None) -> Transport:
    """Get a transport instance by name."""
    if name not in _transports:
        raise KeyError(f"Transport '{name}' not found. Available: {list(_transports.keys())}")
    return _transports[name](config)


def available_transports() -> list:
    return list(_transports.keys())


# Register default transports
register_transport(HttpxTransport)
register_transport(RequestsTransport)

__all__ = [
    "Transport",
    "HttpxTransport",
    "RequestsTransport",
    "register_transport",
    "get_transport",
    "available_transports",
]
