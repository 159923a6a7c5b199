"""Presentation helpers for match results.

The engine's scores are unbounded additive numbers; the UI shows a 0--100
"match %" and a couple of mood tags.  The mappings here are a display
contract shared with the web front end, so the curve constants must not
drift from what users already see.
"""

from __future__ import annotations

from collections.abc import Sequence

from stageside.models.match import FestivalMatchSummary, MatchType, ScoredPerformance
from stageside.utils.confidence import round_score

# Match-type tag shown first on a card.
_MATCH_TYPE_TAGS: dict[MatchType, str] = {
    MatchType.DIRECT_ARTIST: "Must-see",
    MatchType.RELATED_ARTIST: "For you",
    MatchType.RECENTLY_PLAYED: "Fresh pick",
    MatchType.GENRE: "Your vibe",
}

# (tag, genre keywords) in display priority order.
_MOOD_TAGS: list[tuple[str, tuple[str, ...]]] = [
    ("Chill", ("chill", "ambient", "lo-fi")),
    ("High energy", ("dance", "house", "edm")),
    ("Intimate", ("indie", "alternative")),
    ("Loud", ("metal", "punk", "rock")),
    ("Sophisticated", ("jazz", "classical", "acoustic")),
]

MAX_VIBE_TAGS = 2


def format_match_score(score: int) -> int:
    """Map an engine score onto the 0--100 display range.

    Piecewise linear:
        >= 100  -> 85 + score // 10, capped at 100 (top artists)
        60..99  -> 65 + (score - 60) // 3            (related / recent)
        30..59  -> 45 + (score - 30) // 2            (genre)
        < 30    -> floor(score * 1.5)                (discovery)
    """
    if score >= 100:
        return min(100, 85 + score // 10)
    if score >= 60:
        return 65 + (score - 60) // 3
    if score >= 30:
        return 45 + (score - 30) // 2
    return int(score * 1.5)


def generate_vibe_tags(match_type: MatchType, genres: Sequence[str]) -> list[str]:
    """Up to two short tags describing a show for its card."""
    tags: list[str] = []
    type_tag = _MATCH_TYPE_TAGS.get(match_type)
    if type_tag:
        tags.append(type_tag)

    genre_text = " ".join(genre.lower() for genre in genres)
    for tag, keywords in _MOOD_TAGS:
        if any(keyword in genre_text for keyword in keywords):
            tags.append(tag)

    return tags[:MAX_VIBE_TAGS]


# Festival-level bonuses for lineups packed with favourites.
_FIVE_MUST_SEE_BONUS = (5, 10, 95)
_TEN_MUST_SEE_BONUS = (10, 5, 98)

_DISCOVERY_TYPES = (MatchType.RELATED_ARTIST, MatchType.RECENTLY_PLAYED, MatchType.GENRE)


def summarize_festival_match(scored_lineup: Sequence[ScoredPerformance]) -> FestivalMatchSummary:
    """Summarize how well a festival lineup fits the listener.

    The percentage is the mean display score of the lineup, bumped for
    lineups with many direct-artist matches.
    """
    if not scored_lineup:
        return FestivalMatchSummary()

    must_see = sorted(
        (entry for entry in scored_lineup if entry.match_type is MatchType.DIRECT_ARTIST),
        key=lambda entry: -entry.score,
    )
    discoveries = sorted(
        (entry for entry in scored_lineup if entry.match_type in _DISCOVERY_TYPES),
        key=lambda entry: -entry.score,
    )

    percentage = sum(format_match_score(entry.score) for entry in scored_lineup) / len(scored_lineup)
    for threshold, bonus, cap in (_FIVE_MUST_SEE_BONUS, _TEN_MUST_SEE_BONUS):
        if len(must_see) >= threshold:
            percentage = max(percentage, min(cap, percentage + bonus))

    return FestivalMatchSummary(
        match_percentage=min(100, round_score(percentage)),
        matched_count=len(must_see) + len(discoveries),
        total_count=len(scored_lineup),
        must_see=must_see,
        discoveries=discoveries,
    )
