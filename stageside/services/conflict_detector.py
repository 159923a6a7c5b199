"""Schedule conflict detection for a user's selected performances.

Checks every unordered pair of the selection: same day, both timed, and
``[start, end)`` intervals that intersect.  The overlap is the exact
intersection length in minutes, so back-to-back sets (one ends at 21:00,
the next starts at 21:00) do not conflict.

This is O(n^2) in the selection size.  Selections are user-curated and
small; never run it over a whole festival lineup.
"""

from __future__ import annotations

from collections.abc import Sequence

from stageside.models.lineup import Performance
from stageside.models.schedule import ScheduleConflict


def overlap_minutes(first: Performance, second: Performance) -> int:
    """Minutes two sets overlap, or 0 if they don't (or can't be compared)."""
    if not (first.has_timing and second.has_timing) or first.day != second.day:
        return 0
    overlap = min(first.end_minutes, second.end_minutes) - max(first.start_minutes, second.start_minutes)
    return max(0, overlap)


def detect_conflicts(selected: Sequence[Performance]) -> list[ScheduleConflict]:
    """Find every pairwise same-day overlap in a selection.

    Pairs of entries with the same performance id (duplicates, or the same
    act selected twice) are skipped, as are entries without timing.

    Args:
        selected: The user's agenda (or a generated itinerary).

    Returns:
        Conflicts in selection order (``first`` precedes ``second``).
    """
    conflicts: list[ScheduleConflict] = []
    for i, first in enumerate(selected):
        for second in selected[i + 1:]:
            if first.id == second.id:
                continue
            overlap = overlap_minutes(first, second)
            if overlap > 0:
                conflicts.append(
                    ScheduleConflict(
                        first=first,
                        second=second,
                        day=first.day,
                        overlap_minutes=overlap,
                    )
                )
    return conflicts
