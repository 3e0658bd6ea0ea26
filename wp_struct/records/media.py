"""Media library records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from wp_struct.mapping import RecordPatch, renamed_key
from wp_struct.registry import RECORD_TYPES


MIME_TYPE_KEY = "mime-type"


@RECORD_TYPES.register
@dataclass
class MediaItemSize:
    """One generated size of an uploaded image.

    The remote API names the MIME type key ``mime-type``, which is not a
    valid identifier, so the field is projected through a patch.
    """

    __struct_patch__: ClassVar[RecordPatch] = renamed_key("mime_type", MIME_TYPE_KEY)

    file: str | None = None
    width: int | None = None
    height: int | None = None
    mime_type: str | None = None


@RECORD_TYPES.register
@dataclass
class MediaItemSizes:
    thumbnail: MediaItemSize | None = None
    medium: MediaItemSize | None = None
    large: MediaItemSize | None = None
    post_thumbnail: MediaItemSize | None = None


@RECORD_TYPES.register
@dataclass
class MediaItemMetadata:
    width: int | None = None
    height: int | None = None
    file: str | None = None
    sizes: MediaItemSizes | None = None


@RECORD_TYPES.register
@dataclass
class MediaItem:
    """An attachment in the blog's media library."""

    attachment_id: int | None = None
    date_created_gmt: datetime | None = None
    parent: int | None = None
    link: str | None = None
    title: str | None = None
    caption: str | None = None
    description: str | None = None
    metadata: MediaItemMetadata | None = None
    thumbnail: str | None = None


@RECORD_TYPES.register
@dataclass
class MediaItemUploadResult:
    """Result struct returned after uploading a file."""

    id: int | None = None
    file: str | None = None
    url: str | None = None
    type: str | None = None
