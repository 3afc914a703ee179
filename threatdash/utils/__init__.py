"""Shared utility helpers."""

from threatdash.utils.text import format_date, truncate_followed_by_dots

__all__ = ["format_date", "truncate_followed_by_dots"]
