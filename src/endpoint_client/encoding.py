"""
Request body encoders: JSON and multipart/form-data.
"""
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import BaseModel

CRLF = "\r\n"
JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"
FILE_FIELD_NAME = "file"


def new_boundary() -> str:
    """Fresh random boundary token."""
    return uuid.uuid4().hex.upper()


def encode_json(value: Any) -> bytes:
    """Serialize a mapping, sequence or pydantic model to UTF-8 JSON bytes."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True).encode("utf-8")
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True)
class MultipartSpec:
    """multipart/form-data body: form fields followed by exactly one file part.

    The boundary is not checked against field values or file content.
    The whole body is buffered in memory by `encode()`.
    """
    file_bytes: bytes
    file_name: str
    mime_type: str
    fields: Dict[str, str] = field(default_factory=dict)
    boundary: str = field(default_factory=new_boundary)

    @property
    def content_type(self) -> str:
        return f"{MULTIPART_CONTENT_TYPE}; boundary={self.boundary}"

    def encode(self) -> bytes:
        delimiter = f"--{self.boundary}{CRLF}".encode("utf-8")
        parts: List[bytes] = []

        for name, value in self.fields.items():
            parts.append(delimiter)
            parts.append(f'Content-Disposition: form-data; name="{name}"{CRLF}{CRLF}'.encode("utf-8"))
            parts.append(f"{value}{CRLF}".encode("utf-8"))

        parts.append(delimiter)
        parts.append(
            f'Content-Disposition: form-data; name="{FILE_FIELD_NAME}"; '
            f'filename="{self.file_name}"{CRLF}'.encode("utf-8")
        )
        parts.append(f"Content-Type: {self.mime_type}{CRLF}{CRLF}".encode("utf-8"))
        parts.append(self.file_bytes)
        parts.append(CRLF.encode("utf-8"))

        parts.append(f"--{self.boundary}--{CRLF}".encode("utf-8"))
        return b"".join(parts)
