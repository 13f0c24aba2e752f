"""
Configuration models and environment detection for endpoint-client.
"""
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# Constants
DEFAULT_TIMEOUT_CONNECT = 5.0
DEFAULT_TIMEOUT_READ = 30.0
DEFAULT_TIMEOUT_WRITE = 10.0
DEFAULT_UPLOAD_CHUNK_SIZE = 64 * 1024

DEBUG_ENV_VAR = "ENDPOINT_CLIENT_DEBUG"
_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def get_app_env(default: str = "dev") -> str:
    """Get the current application environment."""
    return os.getenv("APP_ENV", default)


def is_debug_enabled(explicit: Optional[bool] = None) -> bool:
    """
    Resolve whether debug diagnostics are enabled:
    1. Explicit argument (if not None)
    2. ENDPOINT_CLIENT_DEBUG env var
    3. APP_ENV == "dev"
    """
    if explicit is not None:
        return explicit
    raw = os.getenv(DEBUG_ENV_VAR, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return get_app_env().lower() == "dev"


class TimeoutConfig(BaseModel):
    """Timeout configuration."""
    connect: float = DEFAULT_TIMEOUT_CONNECT
    read: float = DEFAULT_TIMEOUT_READ
    write: float = DEFAULT_TIMEOUT_WRITE
    pool: Optional[float] = None


class RetryPolicy(BaseModel):
    """Retry policy executed by the client call loop.

    A retry is attempted only when an interceptor signals it for a response.
    The delay before retry ``n`` (0-based) is
    ``min(backoff_seconds * backoff_factor ** n, max_backoff_seconds)``.
    """
    max_retries: int = Field(default=0, ge=0)
    backoff_seconds: float = Field(default=0.5, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1.0)
    max_backoff_seconds: float = Field(default=30.0, ge=0)

    def delay_for(self, attempt: int) -> float:
        return min(self.backoff_seconds * (self.backoff_factor ** attempt), self.max_backoff_seconds)


class ClientConfig(BaseModel):
    """Client configuration."""
    timeout: Optional[Union[float, TimeoutConfig]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    follow_redirects: bool = False
    verify_ssl: bool = True
    proxy_url: Optional[str] = None
    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    debug: Optional[bool] = None
    upload_chunk_size: int = Field(default=DEFAULT_UPLOAD_CHUNK_SIZE, gt=0)

    @field_validator("proxy_url")
    @classmethod
    def validate_proxy_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://", "socks5://")):
            raise ValueError("proxy_url must start with http://, https:// or socks5://")
        return v


def normalize_timeout(timeout: Optional[Union[float, TimeoutConfig]]) -> TimeoutConfig:
    """Normalize timeout to TimeoutConfig object."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=float(timeout), read=float(timeout), write=float(timeout))
    return timeout


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully resolved configuration ready for usage."""
    timeout: TimeoutConfig
    headers: Dict[str, str]
    follow_redirects: bool
    verify_ssl: bool
    proxy_url: Optional[str]
    retry: RetryPolicy
    debug: bool
    upload_chunk_size: int


def resolve_config(config: Optional[ClientConfig] = None) -> ResolvedConfig:
    """Apply defaults and return resolved config."""
    config = config or ClientConfig()
    resolved = ResolvedConfig(
        timeout=normalize_timeout(config.timeout),
        headers=dict(config.headers),
        follow_redirects=config.follow_redirects,
        verify_ssl=config.verify_ssl,
        proxy_url=config.proxy_url,
        retry=config.retry,
        debug=is_debug_enabled(config.debug),
        upload_chunk_size=config.upload_chunk_size,
    )
    logger.debug(
        f"Resolved client config: follow_redirects={resolved.follow_redirects}, "
        f"max_retries={resolved.retry.max_retries}, debug={resolved.debug}"
    )
    return resolved
