"""Record types exchanged with the remote blogging API."""

from .comment import Comment
from .media import MediaItem, MediaItemMetadata, MediaItemSize, MediaItemSizes, MediaItemUploadResult
from .post import CustomField, Enclosure, Post, Term
from .post_type import PostType
from .user import User


__all__ = [
    "Comment",
    "CustomField",
    "Enclosure",
    "MediaItem",
    "MediaItemMetadata",
    "MediaItemSize",
    "MediaItemSizes",
    "MediaItemUploadResult",
    "Post",
    "PostType",
    "Term",
    "User",
]
