"""
Endpoint descriptors: one value per logical API call.
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Protocol, Union, runtime_checkable
from urllib.parse import quote, urlencode

import httpx

from .encoding import JSON_CONTENT_TYPE, MultipartSpec, encode_json
from .errors import InvalidURLError
from .types import HttpMethod, HttpRequest, header_value

Body = Union[bytes, MultipartSpec, None]

_ALLOWED_SCHEMES = ("http", "https")


@runtime_checkable
class Endpoint(Protocol):
    """Anything the client can resolve into a transport request."""
    def resolve(self) -> HttpRequest: ...


@dataclass(frozen=True)
class ApiVersion:
    """API version tag mapped to a URL path prefix.

    ``ApiVersion("v2").prefix == "/api/v2/"``; pass ``prefix`` to override.
    """
    tag: str
    prefix: str = ""

    V1: ClassVar["ApiVersion"]
    NONE: ClassVar["ApiVersion"]

    def __post_init__(self) -> None:
        if not self.prefix and self.tag:
            object.__setattr__(self, "prefix", f"/api/{self.tag}/")

    def __str__(self) -> str:
        return self.tag


ApiVersion.V1 = ApiVersion("v1")
ApiVersion.NONE = ApiVersion("", prefix="")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class EndpointDescriptor:
    """Immutable description of one API call."""
    method: HttpMethod
    path: str
    base_url: str
    api_version: ApiVersion = ApiVersion.V1
    headers: Dict[str, str] = field(default_factory=dict)
    query_params: Dict[str, Any] = field(default_factory=dict)
    body: Body = None

    @classmethod
    def with_json(
        cls,
        method: HttpMethod,
        path: str,
        base_url: str,
        payload: Any,
        api_version: ApiVersion = ApiVersion.V1,
        headers: Optional[Dict[str, str]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> "EndpointDescriptor":
        """Descriptor whose body is `payload` serialized as JSON."""
        merged = dict(headers or {})
        if header_value(merged, "Content-Type") is None:
            merged["Content-Type"] = JSON_CONTENT_TYPE
        return cls(
            method=method,
            path=path,
            base_url=base_url,
            api_version=api_version,
            headers=merged,
            query_params=dict(query_params or {}),
            body=encode_json(payload),
        )

    @classmethod
    def with_multipart(
        cls,
        method: HttpMethod,
        path: str,
        base_url: str,
        multipart: MultipartSpec,
        api_version: ApiVersion = ApiVersion.V1,
        headers: Optional[Dict[str, str]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> "EndpointDescriptor":
        """Descriptor carrying a multipart body and its Content-Type header."""
        merged = dict(headers or {})
        if header_value(merged, "Content-Type") is None:
            merged["Content-Type"] = multipart.content_type
        return cls(
            method=method,
            path=path,
            base_url=base_url,
            api_version=api_version,
            headers=merged,
            query_params=dict(query_params or {}),
            body=multipart,
        )

    @property
    def url(self) -> str:
        """The unvalidated URL string: base URL + version prefix + path + query."""
        url = f"{self.base_url}{self.api_version.prefix}{self.path}"
        if self.query_params:
            query = urlencode(
                {key: _query_value(value) for key, value in self.query_params.items()},
                quote_via=quote,
            )
            url = f"{url}?{query}"
        return url

    def body_bytes(self) -> Optional[bytes]:
        if isinstance(self.body, MultipartSpec):
            return self.body.encode()
        return self.body

    def resolve(self) -> HttpRequest:
        """Build the transport request, or raise InvalidURLError."""
        url = self.url
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise InvalidURLError(url, str(e)) from e

        if parsed.scheme not in _ALLOWED_SCHEMES:
            raise InvalidURLError(url, "scheme must be http or https")
        if not parsed.host:
            raise InvalidURLError(url, "missing host")

        return HttpRequest(
            method=HttpMethod(self.method),
            url=url,
            headers=dict(self.headers),
            body=self.body_bytes(),
        )
