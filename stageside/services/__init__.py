"""Matching and scheduling services.

- **name_matcher** -- artist identity (exact, alias, containment, fuzzy).
- **genre_affinity** -- direct and affinity genre overlap.
- **match_scorer** -- tiered taste-to-performance scoring.
- **presentation** -- display score curve, vibe tags, festival summary.
- **schedule_builder** -- per-day time-ordered grid and stage x time slots.
- **conflict_detector** -- pairwise overlap detection over a selection.
- **itinerary_generator** -- bounded, non-overlapping day plans and swaps.
- **calendar_export** -- ICS rendering of a plan or agenda.
- **profile_aggregator** -- merge of per-service listening data.
"""

from stageside.config.domain_knowledge import MatchingTables
from stageside.services.genre_affinity import GenreAffinityResolver
from stageside.services.match_scorer import MatchScorer
from stageside.services.name_matcher import NameMatcher


def build_match_scorer(tables: MatchingTables, max_top_artists: int | None = None) -> MatchScorer:
    """Wire a scorer with matchers sharing the same tables."""
    return MatchScorer(
        name_matcher=NameMatcher(tables),
        genre_resolver=GenreAffinityResolver(tables),
        max_top_artists=max_top_artists,
    )


__all__ = ["GenreAffinityResolver", "MatchScorer", "NameMatcher", "build_match_scorer"]
