"""Smart festival itinerary generation.

Picks, for each festival day, a bounded set of non-overlapping sets that
maximizes the listener's match value.

Algorithm (per day)
-------------------
1. Keep only timed performances; order them by score descending, then
   match-type priority (direct-artist > related-artist > recently-played >
   genre > discovery), then lineup order.
2. Walk that order greedily.  A candidate is admitted when it overlaps no
   already-admitted set of the day, the day is below ``max_per_day`` and,
   for discovery matches, ``include_discoveries`` is on.  A candidate that
   overlaps an admitted set is recorded as that slot's alternative.
3. Among equally-scored candidates that all fit, prefer the one leaving at
   least ``rest_break_minutes`` between it and the previously admitted set.
   This is only a tie-break; a high-value act is never refused for being
   adjacent to another.

After every day is planned the conflict detector runs over the whole plan
and anything it finds is surfaced in ``Itinerary.conflicts`` rather than
silently dropped.  Missing schedule data yields empty days, never an error.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from stageside.models.lineup import Festival, Performance
from stageside.models.match import MatchType, ScoredPerformance
from stageside.models.schedule import (
    Itinerary,
    ItineraryDay,
    ItineraryOptions,
    ItinerarySlot,
    ScheduleConflict,
    SlotPriority,
)
from stageside.services.conflict_detector import detect_conflicts, overlap_minutes
from stageside.utils.confidence import round_score
from stageside.utils.errors import ConfigurationError
from stageside.utils.logging import get_logger
from stageside.utils.time_utils import order_day_labels, resolve_day_date


def _slot_priority(match_type: MatchType) -> SlotPriority:
    if match_type.is_must_see:
        return SlotPriority.MUST_SEE
    if match_type is MatchType.DISCOVERY:
        return SlotPriority.DISCOVERY
    return SlotPriority.RECOMMENDED


def _make_slot(entry: ScoredPerformance, alternatives: Sequence[Performance] = ()) -> ItinerarySlot:
    return ItinerarySlot(
        performance=entry.performance,
        match=entry.match,
        priority=_slot_priority(entry.match_type),
        reason=entry.match.reasons[0] if entry.match.reasons else "",
        alternatives=list(alternatives),
    )


def _make_day(label: str, slots: list[ItinerarySlot], festival: Festival | None) -> ItineraryDay:
    return ItineraryDay(
        day=label,
        date=resolve_day_date(label, festival.start_date if festival else None),
        slots=slots,
        must_see_count=sum(1 for slot in slots if slot.match.match_type.is_must_see),
        total_score=sum(slot.match.score for slot in slots),
    )


def _highlights(days: Sequence[ItineraryDay], conflicts: Sequence[ScheduleConflict]) -> list[str]:
    highlights: list[str] = []
    must_see = sum(day.must_see_count for day in days)
    if must_see:
        highlights.append(f"{must_see} must-see artists scheduled")
    if conflicts:
        highlights.append(f"{len(conflicts)} schedule conflicts to consider")
    discoveries = sum(
        1 for day in days for slot in day.slots if slot.priority is SlotPriority.DISCOVERY
    )
    if discoveries:
        highlights.append(f"{discoveries} new artists to discover")
    return highlights


def _gap_minutes(candidate: Performance, previous: Performance) -> int:
    """Free minutes between two non-overlapping sets (negative if they overlap)."""
    if candidate.start_minutes >= previous.end_minutes:
        return candidate.start_minutes - previous.end_minutes
    if candidate.end_minutes <= previous.start_minutes:
        return previous.start_minutes - candidate.end_minutes
    return -1


@dataclass
class _Admitted:
    entry: ScoredPerformance
    alternatives: list[Performance] = field(default_factory=list)


class ItineraryGenerator:
    """Builds and edits festival itineraries from a scored lineup.

    Parameters
    ----------
    default_options:
        Used when :meth:`generate` is called without options; typically
        ``Settings().itinerary_options()``.
    """

    def __init__(self, default_options: ItineraryOptions | None = None) -> None:
        self._default_options = default_options or ItineraryOptions()
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(
        self,
        scored_lineup: Sequence[ScoredPerformance],
        festival: Festival | None = None,
        options: ItineraryOptions | None = None,
    ) -> Itinerary:
        """Plan every festival day.

        Parameters
        ----------
        scored_lineup:
            The whole lineup, each entry scored against the listener.
        festival:
            Supplies day order and calendar dates; optional.
        options:
            Per-request knobs; falls back to the generator defaults.

        Returns
        -------
        Itinerary
            Days in festival order with their admitted slots.

        Raises
        ------
        ConfigurationError
            If ``max_per_day`` is zero or negative.
        """
        options = options or self._default_options
        if options.max_per_day <= 0:
            raise ConfigurationError(message=f"max_per_day must be positive, got {options.max_per_day}")

        labels = [entry.performance.day for entry in scored_lineup if entry.performance.day]
        explicit_days = festival.days if festival else []
        ordered_days = order_day_labels(
            [*explicit_days, *labels],
            festival.start_date if festival else None,
            explicit_days,
        )

        days: list[ItineraryDay] = []
        for label in ordered_days:
            day_entries = [
                entry
                for entry in scored_lineup
                if entry.performance.day == label and entry.performance.has_timing
            ]
            admitted = self._plan_day(day_entries, options)
            slots = [_make_slot(item.entry, item.alternatives) for item in admitted]
            days.append(_make_day(label, slots, festival))

        conflicts = detect_conflicts([slot.performance for day in days for slot in day.slots])
        timed_count = sum(1 for entry in scored_lineup if entry.performance.has_timing)
        scheduled_count = sum(len(day.slots) for day in days)

        itinerary = Itinerary(
            days=days,
            conflicts=conflicts,
            total_score=sum(day.total_score for day in days),
            coverage=round_score(scheduled_count * 100 / timed_count) if timed_count else 0,
            highlights=_highlights(days, conflicts),
        )
        self._logger.info(
            "itinerary_generated",
            day_count=len(days),
            scheduled=scheduled_count,
            timed=timed_count,
            conflicts=len(conflicts),
            max_per_day=options.max_per_day,
        )
        return itinerary

    def swap_slot(
        self,
        itinerary: Itinerary,
        day_index: int,
        slot_index: int,
        replacement: ScoredPerformance,
        festival: Festival | None = None,
    ) -> Itinerary:
        """Replace one slot with an act the user prefers.

        The displaced act becomes the first alternative of the new slot.
        Totals, highlights and conflicts are recomputed, so a swap that
        introduces an overlap shows up in ``conflicts``.  Out-of-range
        indices, and a replacement without timing or from another day,
        return the itinerary unchanged.
        """
        if not 0 <= day_index < len(itinerary.days):
            return itinerary
        day = itinerary.days[day_index]
        if not 0 <= slot_index < len(day.slots):
            return itinerary
        performance = replacement.performance
        if not performance.has_timing or performance.day != day.day:
            self._logger.warning(
                "itinerary_swap_rejected",
                day=day.day,
                replacement=performance.id,
                replacement_day=performance.day,
                has_timing=performance.has_timing,
            )
            return itinerary

        old_slot = day.slots[slot_index]
        alternatives = [
            performance
            for performance in [old_slot.performance, *old_slot.alternatives]
            if performance.id != replacement.performance.id
        ]
        slots = list(day.slots)
        slots[slot_index] = _make_slot(replacement, alternatives)

        new_day = _make_day(day.day, slots, festival).model_copy(update={"date": day.date})
        days = list(itinerary.days)
        days[day_index] = new_day
        conflicts = detect_conflicts([slot.performance for plan_day in days for slot in plan_day.slots])

        self._logger.info(
            "itinerary_slot_swapped",
            day=day.day,
            removed=old_slot.performance.id,
            added=replacement.performance.id,
            conflicts=len(conflicts),
        )
        return itinerary.model_copy(
            update={
                "days": days,
                "conflicts": conflicts,
                "total_score": sum(plan_day.total_score for plan_day in days),
                "highlights": _highlights(days, conflicts),
            }
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _plan_day(
        self,
        day_entries: Sequence[ScoredPerformance],
        options: ItineraryOptions,
    ) -> list[_Admitted]:
        order = {id(entry): index for index, entry in enumerate(day_entries)}
        pending = sorted(
            day_entries,
            key=lambda entry: (-entry.score, entry.match_type.priority, order[id(entry)]),
        )
        admitted: list[_Admitted] = []

        while pending and len(admitted) < options.max_per_day:
            eligible: list[ScoredPerformance] = []
            for entry in pending:
                if entry.match_type is MatchType.DISCOVERY and not options.include_discoveries:
                    continue
                clash = next(
                    (
                        item
                        for item in admitted
                        if overlap_minutes(item.entry.performance, entry.performance) > 0
                    ),
                    None,
                )
                if clash is not None:
                    clash.alternatives.append(entry.performance)
                    continue
                eligible.append(entry)

            if not eligible:
                break

            chosen = self._pick(eligible, admitted[-1].entry.performance if admitted else None, options)
            admitted.append(_Admitted(entry=chosen))
            pending = [entry for entry in eligible if entry is not chosen]

        return admitted

    @staticmethod
    def _pick(
        eligible: Sequence[ScoredPerformance],
        previous: Performance | None,
        options: ItineraryOptions,
    ) -> ScoredPerformance:
        """Highest-value candidate, tie-broken toward a rest break."""
        top_score = eligible[0].score
        tied = [entry for entry in eligible if entry.score == top_score]
        if previous is None or len(tied) == 1:
            return tied[0]
        return next(
            (
                entry
                for entry in tied
                if _gap_minutes(entry.performance, previous) >= options.rest_break_minutes
            ),
            tied[0],
        )
