"""
Core type definitions for endpoint-client.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Protocol, Union, runtime_checkable


class HttpMethod(str, Enum):
    """HTTP methods (RFC 7231 section 4.3)."""
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


def header_value(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive lookup of `name` in a header mapping."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


@dataclass(frozen=True)
class HttpRequest:
    """Transport-ready request produced by an endpoint descriptor."""
    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    # Per-request transport timeout in seconds. Not sent on the wire.
    timeout: Optional[float] = None

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        return header_value(self.headers, name)

    def has_header(self, name: str) -> bool:
        return self.header(name) is not None

    def with_header(self, name: str, value: str) -> "HttpRequest":
        """Return a copy with `name` set, replacing any case variant of it."""
        lowered = name.lower()
        headers = {k: v for k, v in self.headers.items() if k.lower() != lowered}
        headers[name] = value
        return replace(self, headers=headers)

    def with_timeout(self, timeout: Optional[float]) -> "HttpRequest":
        return replace(self, timeout=timeout)


@dataclass(frozen=True)
class HttpResponse:
    """The (status, headers, body) triple returned by a transport."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    url: str = ""

    @property
    def is_success(self) -> bool:
        """Check if status code is 2xx."""
        return 200 <= self.status <= 299


class _Unchanged:
    """Marker returned by a response transform that keeps the previous response."""

    _instance: Optional["_Unchanged"] = None

    def __new__(cls) -> "_Unchanged":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHANGED"

    def __bool__(self) -> bool:
        return False


UNCHANGED = _Unchanged()

ResponseUpdate = Union[HttpResponse, _Unchanged, None]


@runtime_checkable
class ProgressDelegate(Protocol):
    """Receives upload progress as a fraction in [0.0, 1.0]."""
    def on_progress(self, fraction: float) -> None: ...


ProgressCallback = Union[ProgressDelegate, Callable[[float], None]]


def as_progress_callback(progress: Optional[ProgressCallback]) -> Optional[Callable[[float], None]]:
    """Normalize a delegate object or plain callable to a callable."""
    if progress is None:
        return None
    if isinstance(progress, ProgressDelegate):
        return progress.on_progress
    if callable(progress):
        return progress
    raise TypeError(f"progress must be a ProgressDelegate or callable, got {type(progress).__name__}")
