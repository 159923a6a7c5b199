"""Schedule, conflict and itinerary models.

Everything here is built fresh per request from a scored lineup.  The
engine never persists these; saving a user's agenda is the caller's job.
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from stageside.models.lineup import Performance
from stageside.models.match import MatchResult, ScoredPerformance


class ScheduleConflict(BaseModel):
    """Two selected performances on the same day whose sets overlap.

    The relation is symmetric; ``first`` is simply the one that appeared
    earlier in the selection.
    """

    model_config = ConfigDict(frozen=True)

    first: Performance
    second: Performance
    day: str
    overlap_minutes: int = Field(gt=0)

    def involves(self, performance_id: str) -> bool:
        return performance_id in (self.first.id, self.second.id)


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

class ScheduleSlot(BaseModel):
    """One cell of the stage x time grid."""

    model_config = ConfigDict(frozen=True)

    time: str
    stage: str
    entry: ScoredPerformance | None = None

    @property
    def is_empty(self) -> bool:
        return self.entry is None


class ScheduleDay(BaseModel):
    """All timed performances of one day, ordered by (start, stage)."""

    model_config = ConfigDict(frozen=True)

    day: str
    date: datetime.date | None = None
    stages: list[str] = Field(default_factory=list)
    entries: list[ScoredPerformance] = Field(default_factory=list)


class ScheduleGrid(BaseModel):
    """Per-day time-ordered lineup plus the acts that have no usable timing."""

    model_config = ConfigDict(frozen=True)

    days: list[ScheduleDay] = Field(default_factory=list)
    unscheduled: list[ScoredPerformance] = Field(default_factory=list)

    def get_day(self, day: str) -> ScheduleDay | None:
        for schedule_day in self.days:
            if schedule_day.day == day:
                return schedule_day
        return None


# ---------------------------------------------------------------------------
# Itinerary
# ---------------------------------------------------------------------------

class SlotPriority(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    MUST_SEE = "must-see"
    RECOMMENDED = "recommended"
    DISCOVERY = "discovery"


class ItineraryOptions(BaseModel):
    """Knobs for itinerary generation.

    ``max_per_day`` must be positive; the generator rejects anything else
    with :class:`~stageside.utils.errors.ConfigurationError`.
    ``rest_break_minutes`` is a soft preference, never a hard filter.
    """

    model_config = ConfigDict(frozen=True)

    max_per_day: int = 8
    include_discoveries: bool = True
    rest_break_minutes: int = Field(default=90, ge=0)


class ItinerarySlot(BaseModel):
    """A performance admitted into a day plan."""

    model_config = ConfigDict(frozen=True)

    performance: Performance
    match: MatchResult
    priority: SlotPriority
    reason: str
    # Lower- or equal-value acts left out because they overlap this one.
    alternatives: list[Performance] = Field(default_factory=list)


class ItineraryDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    date: datetime.date | None = None
    # Admission order, i.e. descending value.
    slots: list[ItinerarySlot] = Field(default_factory=list)
    must_see_count: int = 0
    total_score: int = 0

    def chronological(self) -> list[ItinerarySlot]:
        """Slots ordered by start time, for timeline rendering."""
        return sorted(self.slots, key=lambda slot: slot.performance.start_minutes or 0)


class Itinerary(BaseModel):
    """A generated festival plan with any residual conflicts surfaced."""

    model_config = ConfigDict(frozen=True)

    days: list[ItineraryDay] = Field(default_factory=list)
    conflicts: list[ScheduleConflict] = Field(default_factory=list)
    total_score: int = 0
    # Percentage of timed performances that made it into the plan.
    coverage: int = 0
    highlights: list[str] = Field(default_factory=list)

    @property
    def performances(self) -> list[Performance]:
        return [slot.performance for day in self.days for slot in day.slots]
