from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time, truncated to whole seconds (MySQL DATETIME precision).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def format_event_date(value: datetime) -> str:
    return value.strftime("%A, %d %B %Y at %H:%M")
