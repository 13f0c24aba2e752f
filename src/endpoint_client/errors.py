from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NETWORK_ERROR = "network_error"
    STATUS_CODE = "status_code"
    DECODING_FAILED = "decoding_failed"
    REQUEST_FAILED = "request_failed"


class ClientError(Exception):
    """Base exception for every failure surfaced by the client."""
    kind: ErrorKind = ErrorKind.REQUEST_FAILED


class InvalidURLError(ClientError):
    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str, reason: Optional[str] = None):
        msg = f"Invalid URL '{url}'"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.url = url
        self.reason = reason


class NetworkError(ClientError):
    kind = ErrorKind.NETWORK_ERROR

    def __init__(self, cause: Exception, url: Optional[str] = None):
        msg = f"Network error: {type(cause).__name__}: {cause}"
        if url:
            msg = f"{msg} ({url})"
        super().__init__(msg)
        self.cause = cause
        self.url = url


class StatusCodeError(ClientError):
    kind = ErrorKind.STATUS_CODE

    def __init__(self, status: int, body: Optional[bytes] = None, url: Optional[str] = None):
        super().__init__(f"Unexpected status code {status}" + (f" for {url}" if url else ""))
        self.status = status
        self.body = body
        self.url = url


class DecodingFailedError(ClientError):
    kind = ErrorKind.DECODING_FAILED

    def __init__(self, cause: Exception, target: Optional[str] = None):
        msg = f"Decoding failed: {cause}"
        if target:
            msg = f"Decoding into {target} failed: {cause}"
        super().__init__(msg)
        self.cause = cause
        self.target = target


class RequestFailedError(ClientError):
    kind = ErrorKind.REQUEST_FAILED

    def __init__(self, cause: Exception):
        super().__init__(f"Request failed: {type(cause).__name__}: {cause}")
        self.cause = cause
