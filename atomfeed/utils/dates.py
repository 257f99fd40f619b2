"""Datetime helpers for feed timestamps."""

from datetime import datetime, timezone
from typing import Optional


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC; feedgen rejects them."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
