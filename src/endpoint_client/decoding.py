"""
Typed decoding of response bodies.
"""
from functools import lru_cache
from typing import Any, Callable, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import DecodingFailedError

T = TypeVar("T")

Decoder = Callable[[bytes], Any]


@lru_cache(maxsize=256)
def _adapter_for(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", None) or repr(response_type)


def decode_body(body: Optional[bytes], response_type: Type[T], decoder: Optional[Decoder] = None) -> T:
    """Parse JSON `body` into `response_type`.

    Any parse or validation failure is raised as DecodingFailedError.
    """
    data = body or b""
    if decoder is not None:
        try:
            return decoder(data)
        except Exception as e:
            raise DecodingFailedError(e, _type_name(response_type)) from e
    try:
        return _adapter_for(response_type).validate_json(data)
    except (ValidationError, ValueError, TypeError) as e:
        raise DecodingFailedError(e, _type_name(response_type)) from e
