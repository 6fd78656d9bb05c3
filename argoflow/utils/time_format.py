"""Relative timestamp formatting for status rows."""

from __future__ import annotations

from datetime import datetime, timezone


def format_relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    """Format ``moment`` as "just now", "5m ago", "3h ago" or "2d ago".

    Naive datetimes are treated as UTC. Returns "" when ``moment`` is None.
    """
    if moment is None:
        return ""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)

    minutes = int((current - moment).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"
