from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current time in the reporting zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name))


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
