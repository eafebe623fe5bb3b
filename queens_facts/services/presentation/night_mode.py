from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

# Fixed UTC-5. No DST handling.
EST = timezone(timedelta(hours=-5))
NIGHT_START_HOUR = 18


def is_night(now: Optional[datetime] = None) -> bool:
    """True from 18:00 until midnight, UTC-5 wall clock."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(EST).hour >= NIGHT_START_HOUR


def theme_for(now: Optional[datetime] = None) -> str:
    return "dark" if is_night(now) else "light"
