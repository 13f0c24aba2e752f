"""
Reference endpoint catalog for a JSONPlaceholder-style posts API.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..encoding import MultipartSpec, new_boundary
from ..endpoint import ApiVersion, EndpointDescriptor
from ..types import HttpMethod, HttpRequest

# Constants
BASE_URL = "https://jsonplaceholder.typicode.com"
POSTS_PATH = "posts"
UPLOAD_PATH = "upload"

DEFAULT_USER_ID = 1
DEFAULT_TITLE = "Title here"
DEFAULT_BODY = "Body here"


class ImageMimeType(str, Enum):
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    BMP = "image/bmp"
    TIFF = "image/tiff"
    SVG = "image/svg+xml"

    @classmethod
    def parse(cls, value: str, default: Optional["ImageMimeType"] = None) -> "ImageMimeType":
        """Map a MIME string to a member, falling back to `default` (PNG)."""
        try:
            return cls(value)
        except ValueError:
            return default or cls.PNG


class Post(BaseModel):
    """A post as exchanged with the API."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    title: str
    body: str

    @classmethod
    def default(cls) -> "Post":
        return cls(user_id=DEFAULT_USER_ID, title=DEFAULT_TITLE, body=DEFAULT_BODY)


@dataclass(frozen=True)
class GetPosts:
    base_url: str = BASE_URL

    @property
    def descriptor(self) -> EndpointDescriptor:
        return EndpointDescriptor(
            method=HttpMethod.GET,
            path=POSTS_PATH,
            base_url=self.base_url,
            api_version=ApiVersion.V1,
        )

    def resolve(self) -> HttpRequest:
        return self.descriptor.resolve()


@dataclass(frozen=True)
class CreatePost:
    post: Post
    base_url: str = BASE_URL

    @property
    def descriptor(self) -> EndpointDescriptor:
        return EndpointDescriptor.with_json(
            method=HttpMethod.POST,
            path=POSTS_PATH,
            base_url=self.base_url,
            payload=self.post,
            api_version=ApiVersion.V1,
        )

    def resolve(self) -> HttpRequest:
        return self.descriptor.resolve()


@dataclass(frozen=True)
class UploadImage:
    data: bytes
    file_name: str
    mime_type: ImageMimeType = ImageMimeType.PNG
    fields: Dict[str, str] = field(default_factory=dict)
    base_url: str = BASE_URL
    # Fixed per endpoint value so a retried upload sends an identical body.
    boundary: str = field(default_factory=new_boundary)

    @property
    def multipart(self) -> MultipartSpec:
        return MultipartSpec(
            file_bytes=self.data,
            file_name=self.file_name,
            mime_type=self.mime_type.value,
            fields=dict(self.fields),
            boundary=self.boundary,
        )

    @property
    def descriptor(self) -> EndpointDescriptor:
        return EndpointDescriptor.with_multipart(
            method=HttpMethod.POST,
            path=UPLOAD_PATH,
            base_url=self.base_url,
            multipart=self.multipart,
            api_version=ApiVersion.V1,
        )

    def resolve(self) -> HttpRequest:
        return self.descriptor.resolve()


PostsEndpoint = Union[GetPosts, CreatePost, UploadImage]


def describe(endpoint: PostsEndpoint) -> EndpointDescriptor:
    """Descriptor for any member of the posts catalog."""
    if isinstance(endpoint, (GetPosts, CreatePost, UploadImage)):
        return endpoint.descriptor
    raise TypeError(f"Unknown posts endpoint: {type(endpoint).__name__}")
