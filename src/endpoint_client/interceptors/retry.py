"""
Server-error retry signalling.
"""
import logging
from typing import Iterable, Optional

from ..types import HttpResponse
from .base import Interceptor

logger = logging.getLogger(__name__)

SERVER_ERROR_STATUSES = range(500, 600)


class RetrySignaler(Interceptor):
    """Signals that a response warrants a retry.

    Only observes. The client's call loop owns the backoff and the re-send,
    bounded by its `RetryPolicy`.
    """

    def __init__(self, statuses: Optional[Iterable[int]] = None):
        self._statuses = frozenset(statuses if statuses is not None else SERVER_ERROR_STATUSES)

    def should_retry(self, response: HttpResponse) -> bool:
        if response.status in self._statuses:
            logger.info(f"[RETRY] status {response.status} from {response.url or '<unknown>'} is retryable")
            return True
        return False
