"""
Abstract base transport for HTTP libraries.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..types import HttpRequest, HttpResponse


class Transport(ABC):
    """Abstract network backend used by the client.

    `send` must raise `ClientError` subclasses for its own failures
    (`NetworkError`, `RequestFailedError`) and let `asyncio.CancelledError`
    propagate.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the transport (e.g., 'httpx', 'requests')."""
        pass

    @abstractmethod
    def supports_progress(self) -> bool:
        """Whether `send` can report upload progress."""
        pass

    @abstractmethod
    async def send(
        self,
        request: HttpRequest,
        progress: Optional[Callable[[float], None]] = None,
    ) -> HttpResponse:
        """Send the request and return the raw response."""
        pass

    async def close(self) -> None:
        """Release resources held by the transport."""
        return None
