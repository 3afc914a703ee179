"""Display helpers shared by the dashboard."""

from __future__ import annotations

from datetime import date, datetime


def truncate_followed_by_dots(text: str, max_length: int) -> str:
    """Cut text to ``max_length`` characters and append ``...`` when it was longer."""
    if len(text) > max_length:
        return f"{text[:max_length]}..."
    return text


def format_date(value: str | date | datetime) -> str:
    """Format an ISO date string or date as ``October 19, 2026``."""
    if isinstance(value, str):
        parsed: date = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        parsed = value
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"
