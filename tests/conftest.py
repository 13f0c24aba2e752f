"""
Shared fixtures for endpoint-client tests.
"""
from typing import Callable, List, Optional

import pytest

from endpoint_client.endpoint import ApiVersion, EndpointDescriptor
from endpoint_client.transports.base import Transport
from endpoint_client.types import HttpMethod, HttpRequest, HttpResponse

BASE_URL = "https://api.example.com"


class FakeTransport(Transport):
    """Transport returning canned responses and recording every request."""

    def __init__(self, responses: Optional[List[HttpResponse]] = None, error: Optional[Exception] = None):
        self.responses = list(responses or [HttpResponse(status=200, body=b"{}")])
        self.error = error
        self.requests: List[HttpRequest] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    def supports_progress(self) -> bool:
        return True

    async def send(self, request: HttpRequest, progress: Optional[Callable[[float], None]] = None) -> HttpResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if progress is not None:
            progress(1.0)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def users_endpoint() -> EndpointDescriptor:
    return EndpointDescriptor(
        method=HttpMethod.GET,
        path="users/1",
        base_url=BASE_URL,
        api_version=ApiVersion.V1,
    )
