"""
Timestamp normalization shared by the domain models.

Records arrive from the store as ISO strings or datetimes, sometimes without
an offset. Every model timestamp is made timezone-aware so that day-window
comparisons never mix naive and aware values.
"""

from datetime import datetime, timezone
from typing import Optional


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Interpret a naive datetime as UTC; aware values pass through."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
