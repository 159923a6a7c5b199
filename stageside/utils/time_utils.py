"""Wall-clock and day-label helpers for lineup data.

Lineup sources publish set times as local 24h ``"HH:MM"`` strings and days
as free-form labels ("Friday", "Day 2", "2026-07-31").  Everything here is
tolerant: an unparseable value yields ``None`` and the caller drops the
performance from time-based operations instead of failing.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Iterable, Sequence

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_DAY_N_PATTERN = re.compile(r"^day\s*(\d{1,2})$", re.IGNORECASE)

MINUTES_PER_DAY = 24 * 60

_WEEKDAYS: dict[str, int] = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}


def parse_time_to_minutes(value: str | None) -> int | None:
    """Convert ``"HH:MM"`` into minutes after midnight.

    ``"24:00"`` is accepted as the end of the day (1440).

    Args:
        value: Wall-clock string, or None.

    Returns:
        Minutes after midnight, or None when missing or malformed.
    """
    if not value:
        return None
    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60:
        return None
    if hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours >= 24:
        return None
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Inverse of :func:`parse_time_to_minutes` (``570`` -> ``"09:30"``)."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def resolve_day_date(label: str | None, festival_start: datetime.date | None) -> datetime.date | None:
    """Map a day label onto a calendar date.

    Understands ISO dates, weekday names (the first matching weekday on or
    after the festival start) and ``"Day N"`` (start + N - 1).

    Args:
        label: Day label from the lineup.
        festival_start: First day of the festival, if known.

    Returns:
        The calendar date, or None when the label cannot be resolved.
    """
    if not label:
        return None
    text = label.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass

    if festival_start is None:
        return None

    weekday = _WEEKDAYS.get(text.lower())
    if weekday is not None:
        offset = (weekday - festival_start.weekday()) % 7
        return festival_start + datetime.timedelta(days=offset)

    match = _DAY_N_PATTERN.match(text)
    if match is not None and int(match.group(1)) >= 1:
        return festival_start + datetime.timedelta(days=int(match.group(1)) - 1)

    return None


def order_day_labels(
    labels: Iterable[str],
    festival_start: datetime.date | None = None,
    explicit_order: Sequence[str] = (),
) -> list[str]:
    """Return unique day labels in festival order.

    Labels listed in ``explicit_order`` come first, in that order.  The rest
    are sorted by resolved calendar date; labels that resolve to no date
    keep their first-appearance order after the dated ones.
    """
    unique: list[str] = []
    for label in labels:
        if label not in unique:
            unique.append(label)

    explicit = [label for label in explicit_order if label in unique]
    remaining = [label for label in unique if label not in explicit]
    remaining.sort(
        key=lambda label: (
            resolve_day_date(label, festival_start) or datetime.date.max,
            unique.index(label),
        )
    )
    return explicit + remaining


def weekday_labels(start: datetime.date, end: datetime.date) -> list[str]:
    """Weekday names for every date from ``start`` to ``end`` inclusive."""
    labels: list[str] = []
    current = start
    while current <= end:
        labels.append(current.strftime("%A"))
        current += datetime.timedelta(days=1)
    return labels
