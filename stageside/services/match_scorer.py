"""Taste-to-lineup match scoring.

Fuses every identity signal we have about a listener into one ranked
score per performance, plus a match type, a confidence and a short
human-readable reason.

Architecture overview
---------------------
Signals are consulted in tiers, strongest first.  A tier only runs when
the best score so far is below that tier's ceiling, because a lower tier
can never beat a score above its own range:

  TIER 1  direct-artist    always checked     round(100 * conf) + rank bonus
          (an exact / near-exact hit scoring >= 100 returns immediately)
  TIER 2  related-artist   best < 80          round(70 * conf)
  TIER 3  recently-played  best < 60          round(60 * conf)
  TIER 4  genre            best < 50          20..40 direct, <= 25 affinity
  FALLBACK discovery       no reason found    "Happening near you"

Within a tier a candidate only replaces the current best when it scores
strictly higher, so ties go to the first (performance artist, profile
artist) pair in iteration order.

The scorer is a pure function of its inputs: no caching, no shared state.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from stageside.models.lineup import Performance
from stageside.models.match import GenreMatchType, MatchResult, MatchType, ScoredPerformance
from stageside.models.profile import UserProfile
from stageside.services.genre_affinity import GenreAffinityResolver
from stageside.services.name_matcher import NameMatcher
from stageside.utils.confidence import round_score
from stageside.utils.logging import get_logger

# Tier weights: score = round(weight * name-match confidence).
DIRECT_ARTIST_WEIGHT = 100
RELATED_ARTIST_WEIGHT = 70
RECENTLY_PLAYED_WEIGHT = 60

# Rank bonus decays linearly from 47 (rank 1) to 0 (rank 17 and below).
RANK_BONUS_BASE = 50
RANK_BONUS_STEP = 3

# A direct hit at or above both thresholds skips every lower tier.
EARLY_EXIT_SCORE = 100
EARLY_EXIT_CONFIDENCE = 0.9

# Lower tiers run only while the best score is below their ceiling.
RELATED_TIER_CEILING = 80
RECENT_TIER_CEILING = 60
GENRE_TIER_CEILING = 50

GENRE_DIRECT_CONFIDENCE = 0.7
GENRE_AFFINITY_CONFIDENCE = 0.5

TOP_FIVE_RANK = 5
LOVED_RANK = 20

DISCOVERY_REASON = "Happening near you"


def rank_bonus(rank: int) -> int:
    """Bonus points for a top artist at ``rank`` (1 = most listened)."""
    return max(0, RANK_BONUS_BASE - rank * RANK_BONUS_STEP)


def _direct_reason(name: str, rank: int) -> str:
    if rank <= TOP_FIVE_RANK:
        return "One of your top 5 artists"
    if rank <= LOVED_RANK:
        return f"You love {name}"
    return f"Based on your taste in {name}"


@dataclass
class _Best:
    """Running best candidate while walking the tiers."""

    score: int = 0
    confidence: float = 0.0
    match_type: MatchType = MatchType.DISCOVERY
    reasons: list[str] = field(default_factory=list)

    def offer(self, score: int, confidence: float, match_type: MatchType, reason: str) -> None:
        if score > self.score:
            self.score = score
            self.confidence = confidence
            self.match_type = match_type
            self.reasons = [reason]


class MatchScorer:
    """Scores performances against a listener profile.

    Parameters
    ----------
    name_matcher:
        Artist identity matcher (alias table injected into it).
    genre_resolver:
        Genre overlap resolver (affinity table injected into it).
    max_top_artists:
        Optional cap on how many top artists are consulted, in profile
        order.  Keeps full-lineup scoring bounded for very long profiles.
    """

    def __init__(
        self,
        name_matcher: NameMatcher,
        genre_resolver: GenreAffinityResolver,
        max_top_artists: int | None = None,
    ) -> None:
        self._names = name_matcher
        self._genres = genre_resolver
        self._max_top_artists = max_top_artists
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score(
        self,
        performance_artists: Sequence[str],
        performance_genres: Sequence[str],
        profile: UserProfile,
    ) -> MatchResult:
        """Score one performance (its artists and genres) against a profile.

        Parameters
        ----------
        performance_artists:
            Every artist name billed on the performance.
        performance_genres:
            Genre tags of the performance.
        profile:
            The listener's merged profile.

        Returns
        -------
        MatchResult
            Never raises; unknown names and empty inputs fall through to
            the discovery fallback with score 0.
        """
        best = _Best()
        top_artists = profile.top_artists
        if self._max_top_artists is not None:
            top_artists = top_artists[: self._max_top_artists]

        # TIER 1 -- direct artist.
        for artist in performance_artists:
            for top in top_artists:
                name_match = self._names.matches(artist, top.name)
                if name_match.is_match:
                    best.offer(
                        round_score(DIRECT_ARTIST_WEIGHT * name_match.confidence) + rank_bonus(top.rank),
                        name_match.confidence,
                        MatchType.DIRECT_ARTIST,
                        _direct_reason(top.name, top.rank),
                    )

        if best.score >= EARLY_EXIT_SCORE and best.confidence >= EARLY_EXIT_CONFIDENCE:
            return self._result(best)

        # TIER 2 -- related artists.
        if best.score < RELATED_TIER_CEILING:
            for artist in performance_artists:
                for related in profile.related_artists:
                    name_match = self._names.matches(artist, related.name)
                    if name_match.is_match:
                        best.offer(
                            round_score(RELATED_ARTIST_WEIGHT * name_match.confidence),
                            name_match.confidence,
                            MatchType.RELATED_ARTIST,
                            f"Similar to {related.related_to} you listen to",
                        )

        # TIER 3 -- recently played.
        if best.score < RECENT_TIER_CEILING and profile.recently_played:
            for artist in performance_artists:
                for recent in profile.recently_played:
                    name_match = self._names.matches(artist, recent)
                    if name_match.is_match:
                        best.offer(
                            round_score(RECENTLY_PLAYED_WEIGHT * name_match.confidence),
                            name_match.confidence,
                            MatchType.RECENTLY_PLAYED,
                            f"You recently played {recent}",
                        )

        # TIER 4 -- genre.
        if best.score < GENRE_TIER_CEILING:
            genre_match = self._genres.resolve(performance_genres, profile.top_genres)
            if genre_match.type is GenreMatchType.DIRECT:
                best.offer(
                    genre_match.score,
                    GENRE_DIRECT_CONFIDENCE,
                    MatchType.GENRE,
                    f"Matches your {genre_match.matched_genres[0]} taste",
                )
            elif genre_match.type is GenreMatchType.AFFINITY:
                best.offer(
                    genre_match.score,
                    GENRE_AFFINITY_CONFIDENCE,
                    MatchType.GENRE,
                    f"You might like this {genre_match.matched_genres[0]} show",
                )

        # FALLBACK -- discovery.
        if not best.reasons:
            best.reasons = [DISCOVERY_REASON]
            best.match_type = MatchType.DISCOVERY
            best.confidence = 0.0

        return self._result(best)

    def score_performance(self, performance: Performance, profile: UserProfile) -> ScoredPerformance:
        """Score a lineup entry, pairing it with its match."""
        match = self.score(performance.artist_names, performance.genres, profile)
        self._logger.debug(
            "performance_scored",
            performance_id=performance.id,
            artist=performance.artist_name,
            score=match.score,
            match_type=match.match_type.value,
        )
        return ScoredPerformance(performance=performance, match=match)

    def score_lineup(
        self,
        performances: Sequence[Performance],
        profile: UserProfile,
    ) -> list[ScoredPerformance]:
        """Score every performance of a lineup, preserving input order."""
        scored = [self.score_performance(performance, profile) for performance in performances]
        self._logger.info(
            "lineup_scored",
            performance_count=len(scored),
            direct_matches=sum(1 for entry in scored if entry.match_type is MatchType.DIRECT_ARTIST),
            top_artist_count=len(profile.top_artists),
        )
        return scored

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _result(best: _Best) -> MatchResult:
        return MatchResult(
            score=best.score,
            reasons=list(best.reasons),
            match_type=best.match_type,
            confidence=best.confidence,
        )
