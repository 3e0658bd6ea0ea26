"""Post records and the nested types they carry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from wp_struct.flatfile import load_record
from wp_struct.registry import RECORD_TYPES


if TYPE_CHECKING:
    from os import PathLike


@RECORD_TYPES.register
@dataclass
class Term:
    """A taxonomy term (category, tag, ...) attached to a post."""

    term_id: int | None = None
    name: str | None = None
    slug: str | None = None
    term_group: int | None = None
    term_taxonomy_id: int | None = None
    taxonomy: str | None = None
    description: str | None = None
    parent: int | None = None
    count: int | None = None


@RECORD_TYPES.register
@dataclass
class CustomField:
    id: int | None = None
    key: str | None = None
    value: str | None = None


@RECORD_TYPES.register
@dataclass
class Enclosure:
    url: str | None = None
    length: int | None = None
    type: str | None = None


@RECORD_TYPES.register
@dataclass
class Post:
    """A blog post as exchanged with the remote API."""

    post_id: int | None = None
    post_title: str | None = None
    post_date: datetime | None = None
    post_date_gmt: datetime | None = None
    post_modified: datetime | None = None
    post_modified_gmt: datetime | None = None
    post_status: str | None = None
    post_type: str | None = None
    post_format: str | None = None
    post_name: str | None = None
    post_author: int | None = None
    post_password: str | None = None
    post_excerpt: str | None = None
    post_content: str | None = None
    post_parent: int | None = None
    post_mime_type: str | None = None
    link: str | None = None
    guid: str | None = None
    menu_order: int | None = None
    comment_status: str | None = None
    ping_status: str | None = None
    sticky: bool | None = None
    terms: list[Term] | None = None
    custom_fields: list[CustomField] | None = None
    enclosure: Enclosure | None = None

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> Post:
        """Load a post drafted in the flat ``key: value`` text format."""
        return load_record(path, cls)
