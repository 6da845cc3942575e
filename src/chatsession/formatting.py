"""Text formatting helpers for conversation summaries."""

from datetime import datetime, timezone

from .config import DESCRIPTION_MAX_LENGTH, JUST_NOW


def truncate(text: str, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Cut text to at most ``limit`` characters."""
    return text[:limit]


def format_relative_timestamp(moment: datetime, now: datetime | None = None) -> str:
    """Format a moment relative to now, e.g. "Just now", "5m ago", "3d ago".

    Moments older than a week are rendered as a plain date.

    Args:
        moment: The time to describe (naive values are treated as UTC)
        now: Reference time, defaults to the current UTC time

    Returns:
        Human readable relative time
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = (now - moment).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return JUST_NOW
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"

    return moment.date().isoformat()
