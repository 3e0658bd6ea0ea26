"""Comment record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from wp_struct.registry import RECORD_TYPES


@RECORD_TYPES.register
@dataclass
class Comment:
    comment_id: int | None = None
    parent: int | None = None
    user_id: int | None = None
    date_created_gmt: datetime | None = None
    status: str | None = None
    content: str | None = None
    link: str | None = None
    post_id: int | None = None
    post_title: str | None = None
    author: str | None = None
    author_url: str | None = None
    author_email: str | None = None
    author_ip: str | None = None
