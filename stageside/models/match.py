"""Match models produced by the name matcher, genre resolver and scorer.

A :class:`MatchResult` is computed per (performance, profile) pair and is
immutable: when either the lineup or the profile changes, the result is
recomputed rather than patched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from stageside.models.lineup import Performance


class MatchType(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """How a performance relates to the listener's taste, strongest first."""

    DIRECT_ARTIST = "direct-artist"
    RELATED_ARTIST = "related-artist"
    RECENTLY_PLAYED = "recently-played"
    GENRE = "genre"
    DISCOVERY = "discovery"

    @property
    def priority(self) -> int:
        """0 for the strongest signal, 4 for discovery."""
        return _MATCH_TYPE_PRIORITY[self]

    @property
    def is_must_see(self) -> bool:
        return self in (MatchType.DIRECT_ARTIST, MatchType.RELATED_ARTIST)


_MATCH_TYPE_PRIORITY: dict[MatchType, int] = {
    MatchType.DIRECT_ARTIST: 0,
    MatchType.RELATED_ARTIST: 1,
    MatchType.RECENTLY_PLAYED: 2,
    MatchType.GENRE: 3,
    MatchType.DISCOVERY: 4,
}


class GenreMatchType(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    DIRECT = "direct"
    AFFINITY = "affinity"
    NONE = "none"


class NameMatch(BaseModel):
    """Outcome of comparing two artist names."""

    model_config = ConfigDict(frozen=True)

    is_match: bool
    confidence: float = Field(ge=0.0, le=1.0)


class GenreMatch(BaseModel):
    """Outcome of comparing performance genres against profile genres."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0)
    matched_genres: list[str] = Field(default_factory=list)
    type: GenreMatchType = GenreMatchType.NONE


class MatchResult(BaseModel):
    """Ranked match of one performance against one profile.

    ``score`` is an unbounded additive score (a rank-1 exact hit scores
    147), not a percentage; use
    :func:`stageside.services.presentation.format_match_score` for display.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0)
    reasons: list[str] = Field(default_factory=list, max_length=2)
    match_type: MatchType = MatchType.DISCOVERY
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class ScoredPerformance(BaseModel):
    """A lineup entry paired with its match against the current profile."""

    model_config = ConfigDict(frozen=True)

    performance: Performance
    match: MatchResult

    @property
    def score(self) -> int:
        return self.match.score

    @property
    def match_type(self) -> MatchType:
        return self.match.match_type


class FestivalMatchSummary(BaseModel):
    """How well a whole festival lineup fits a listener.

    ``must_see`` holds direct-artist matches and ``discoveries`` holds
    related-artist, recently-played and genre matches, each sorted by score
    descending.
    """

    model_config = ConfigDict(frozen=True)

    match_percentage: int = Field(default=0, ge=0, le=100)
    matched_count: int = 0
    total_count: int = 0
    must_see: list[ScoredPerformance] = Field(default_factory=list)
    discoveries: list[ScoredPerformance] = Field(default_factory=list)
