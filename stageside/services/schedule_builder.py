"""Festival schedule grid construction.

Turns a flat scored lineup into a per-day, start-time-ordered grid:

- Days come out in festival order (explicit ``Festival.days`` first, then
  by calendar date, then first appearance).
- Within a day entries are sorted by (start time, stage); the sort is
  stable, so input order breaks remaining ties.
- Entries without usable timing (no day, unparseable times, end not
  after start) go to ``ScheduleGrid.unscheduled`` instead of the grid.
"""

from __future__ import annotations

from collections.abc import Sequence

from stageside.models.lineup import Festival
from stageside.models.match import ScoredPerformance
from stageside.models.schedule import ScheduleDay, ScheduleGrid, ScheduleSlot
from stageside.utils.errors import ConfigurationError
from stageside.utils.logging import get_logger
from stageside.utils.time_utils import (
    format_minutes,
    order_day_labels,
    resolve_day_date,
    weekday_labels,
)

logger = get_logger(__name__)

DEFAULT_STAGE = "Main Stage"


def _stage_of(entry: ScoredPerformance) -> str:
    return entry.performance.stage or DEFAULT_STAGE


def _grid_sort_key(entry: ScoredPerformance) -> tuple[int, str]:
    return (entry.performance.start_minutes or 0, _stage_of(entry))


def build_grid(scored_lineup: Sequence[ScoredPerformance], festival: Festival | None = None) -> ScheduleGrid:
    """Group a scored lineup into time-ordered days.

    Args:
        scored_lineup: Every lineup entry with its match.
        festival: Supplies the day order and dates; optional.

    Returns:
        The grid.  Never raises on missing or malformed timing.
    """
    timed = [entry for entry in scored_lineup if entry.performance.has_timing]
    unscheduled = [entry for entry in scored_lineup if not entry.performance.has_timing]

    start_date = festival.start_date if festival else None
    explicit_days = festival.days if festival else []

    labels = [entry.performance.day for entry in scored_lineup if entry.performance.day]
    if not labels and not explicit_days and festival and festival.start_date and festival.end_date:
        # No day labels anywhere: lay out empty days from the festival dates.
        labels = weekday_labels(festival.start_date, festival.end_date)

    days: list[ScheduleDay] = []
    for label in order_day_labels([*explicit_days, *labels], start_date, explicit_days):
        day_entries = sorted(
            (entry for entry in timed if entry.performance.day == label),
            key=_grid_sort_key,
        )
        stages: list[str] = []
        for entry in scored_lineup:
            if entry.performance.day == label and entry.performance.has_timing:
                stage = _stage_of(entry)
                if stage not in stages:
                    stages.append(stage)
        days.append(
            ScheduleDay(
                day=label,
                date=resolve_day_date(label, start_date),
                stages=stages,
                entries=day_entries,
            )
        )

    logger.debug(
        "schedule_grid_built",
        day_count=len(days),
        timed_count=len(timed),
        unscheduled_count=len(unscheduled),
    )
    return ScheduleGrid(days=days, unscheduled=unscheduled)


def build_time_slots(day: ScheduleDay, interval_minutes: int = 30) -> list[list[ScheduleSlot]]:
    """Render one day as rows of stage cells at a fixed interval.

    Rows span from the earliest start (rounded down to the interval) to the
    latest end.  A cell holds the set that is on stage during that interval,
    or nothing.

    Raises:
        ConfigurationError: If ``interval_minutes`` is not positive.
    """
    if interval_minutes <= 0:
        raise ConfigurationError(message=f"interval_minutes must be positive, got {interval_minutes}")
    if not day.entries:
        return []

    first_start = min(entry.performance.start_minutes for entry in day.entries)
    last_end = max(entry.performance.end_minutes for entry in day.entries)
    stages = day.stages or [DEFAULT_STAGE]

    rows: list[list[ScheduleSlot]] = []
    slot_start = first_start - first_start % interval_minutes
    while slot_start < last_end:
        slot_end = slot_start + interval_minutes
        row = []
        for stage in stages:
            occupant = next(
                (
                    entry
                    for entry in day.entries
                    if _stage_of(entry) == stage
                    and entry.performance.start_minutes < slot_end
                    and slot_start < entry.performance.end_minutes
                ),
                None,
            )
            row.append(ScheduleSlot(time=format_minutes(slot_start), stage=stage, entry=occupant))
        rows.append(row)
        slot_start = slot_end
    return rows
