"""User record."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from wp_struct.registry import RECORD_TYPES


@RECORD_TYPES.register
@dataclass
class User:
    user_id: int | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    email: str | None = None
    nickname: str | None = None
    nicename: str | None = None
    url: str | None = None
    display_name: str | None = None
    registered: datetime | None = None
    roles: list[str] | None = None
