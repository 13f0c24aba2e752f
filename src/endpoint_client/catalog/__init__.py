from .posts import (
    BASE_URL,
    CreatePost,
    GetPosts,
    ImageMimeType,
    Post,
    PostsEndpoint,
    UploadImage,
    describe,
)

__all__ = [
    "BASE_URL",
    "CreatePost",
    "GetPosts",
    "ImageMimeType",
    "Post",
    "PostsEndpoint",
    "UploadImage",
    "describe",
]
