"""Lineup models: festivals and the performances on their bill.

Lineup sources (ticketing and festival data providers) hand over already
normalized records.  Optional fields are tolerated rather than rejected:
a performance without a day or a parseable set time is still scored, it
just cannot take part in grid placement, conflict detection or itinerary
scheduling.
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stageside.utils.text_normalizer import split_artist_names
from stageside.utils.time_utils import parse_time_to_minutes


class Performance(BaseModel):
    """A single lineup entry (one act, one set).

    ``day`` is a label ("Saturday", "Day 2"), not necessarily a calendar
    date.  ``start_time``/``end_time`` are local wall-clock ``"HH:MM"``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    artist_name: str
    day: str | None = None
    stage: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    genres: list[str] = Field(default_factory=list)
    headliner: bool = False

    @field_validator("day", "stage", "start_time", "end_time", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def start_minutes(self) -> int | None:
        """Start time in minutes after midnight, or None if unparseable."""
        return parse_time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int | None:
        """End time in minutes after midnight, or None if unparseable."""
        return parse_time_to_minutes(self.end_time)

    @property
    def has_timing(self) -> bool:
        """True when the set has a day and a start strictly before its end."""
        start, end = self.start_minutes, self.end_minutes
        return self.day is not None and start is not None and end is not None and end > start

    @property
    def duration_minutes(self) -> int | None:
        if not self.has_timing:
            return None
        return self.end_minutes - self.start_minutes  # type: ignore[operator]

    @property
    def artist_names(self) -> list[str]:
        """Names to match against a profile.

        The full billing always comes first so an exact hit on a shared
        billing wins ties; the individual acts of a "b2b" / "feat." billing
        follow.
        """
        names = [self.artist_name]
        parts = split_artist_names(self.artist_name)
        if len(parts) > 1:
            names.extend(part for part in parts if part not in names)
        return names


class Festival(BaseModel):
    """Festival metadata needed to order days and date calendar events."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    start_date: datetime.date | None = None
    end_date: datetime.date | None = None
    # Optional explicit day order ("Friday", "Saturday", ...).
    days: list[str] = Field(default_factory=list)
    city: str | None = None
    venue: str | None = None
