"""Time source injected into services that stamp or compare instants."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    """Clock that always returns ``instant``; handy for tests and replays."""
    return lambda: instant
