"""Stageside domain models — re-exports all public model classes.

The models are organized across four submodules by domain concern:
    - lineup.py    — Festival and Performance (what is on the bill)
    - profile.py   — UserProfile plus per-service inputs to the aggregator
    - match.py     — NameMatch, GenreMatch, MatchResult, scored lineup entries
    - schedule.py  — Grid, conflicts and generated itineraries

If you add a new model class, remember to add it to ``__all__`` too.
"""

from __future__ import annotations

from stageside.models.lineup import Festival, Performance
from stageside.models.match import (
    FestivalMatchSummary,
    GenreMatch,
    GenreMatchType,
    MatchResult,
    MatchType,
    NameMatch,
    ScoredPerformance,
)
from stageside.models.profile import (
    AggregatedArtist,
    MusicService,
    RelatedArtist,
    ServiceArtist,
    ServiceProfile,
    TopArtist,
    UserProfile,
)
from stageside.models.schedule import (
    Itinerary,
    ItineraryDay,
    ItineraryOptions,
    ItinerarySlot,
    ScheduleConflict,
    ScheduleDay,
    ScheduleGrid,
    ScheduleSlot,
    SlotPriority,
)

__all__ = [
    "AggregatedArtist",
    "Festival",
    "FestivalMatchSummary",
    "GenreMatch",
    "GenreMatchType",
    "Itinerary",
    "ItineraryDay",
    "ItineraryOptions",
    "ItinerarySlot",
    "MatchResult",
    "MatchType",
    "MusicService",
    "NameMatch",
    "Performance",
    "RelatedArtist",
    "ScheduleConflict",
    "ScheduleDay",
    "ScheduleGrid",
    "ScheduleSlot",
    "ScoredPerformance",
    "ServiceArtist",
    "ServiceProfile",
    "SlotPriority",
    "TopArtist",
    "UserProfile",
]
