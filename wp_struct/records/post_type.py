"""Post type description record."""

from __future__ import annotations

from dataclasses import dataclass

from wp_struct.registry import RECORD_TYPES


@RECORD_TYPES.register
@dataclass
class PostType:
    name: str | None = None
    label: str | None = None
    hierarchical: bool | None = None
    public: bool | None = None
    show_ui: bool | None = None
    has_archive: bool | None = None
    map_meta_cap: bool | None = None
    menu_position: int | None = None
    menu_icon: str | None = None
    show_in_menu: bool | None = None
    taxonomies: list[str] | None = None
