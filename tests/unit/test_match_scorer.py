"""Unit tests for the tiered match scorer."""

from __future__ import annotations

import pytest

from stageside.models.match import MatchType
from stageside.models.profile import RelatedArtist, TopArtist, UserProfile
from stageside.services import build_match_scorer
from stageside.services.match_scorer import (
    DISCOVERY_REASON,
    GENRE_AFFINITY_CONFIDENCE,
    GENRE_DIRECT_CONFIDENCE,
    MatchScorer,
    rank_bonus,
)
from tests.conftest import make_performance


# ======================================================================
# rank_bonus
# ======================================================================


class TestRankBonus:
    @pytest.mark.parametrize(("rank", "expected"), [(1, 47), (3, 41), (16, 2), (17, 0), (50, 0)])
    def test_values(self, rank: int, expected: int) -> None:
        assert rank_bonus(rank) == expected

    def test_non_increasing(self) -> None:
        bonuses = [rank_bonus(rank) for rank in range(1, 30)]
        assert bonuses == sorted(bonuses, reverse=True)


# ======================================================================
# Direct artist tier
# ======================================================================


class TestDirectArtist:
    def test_top_five_artist(self, scorer: MatchScorer) -> None:
        profile = UserProfile(top_artists=[TopArtist(name="Dua Lipa", rank=3)])
        result = scorer.score(["Dua Lipa"], ["Pop"], profile)
        assert result.match_type is MatchType.DIRECT_ARTIST
        assert result.score == 141
        assert result.confidence == 1.0
        assert result.reasons == ["One of your top 5 artists"]

    def test_loved_artist_reason(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        result = scorer.score(["Ye"], [], sample_profile)
        # Alias hit: round(100 * 0.95) + (50 - 36)
        assert result.score == 109
        assert result.reasons == ["You love Kanye West"]

    def test_lower_ranked_artist_reason(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        result = scorer.score(["Fleet Foxes"], [], sample_profile)
        assert result.score == 100
        assert result.reasons == ["Based on your taste in Fleet Foxes"]

    def test_rank_one_exact_scores_147(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        assert scorer.score(["Phoebe Bridgers"], [], sample_profile).score == 147

    def test_higher_rank_never_scores_lower(self, scorer: MatchScorer) -> None:
        scores = [
            scorer.score(["Dua Lipa"], [], UserProfile(top_artists=[TopArtist(name="Dua Lipa", rank=rank)])).score
            for rank in range(1, 25)
        ]
        assert scores == sorted(scores, reverse=True)

    def test_best_billing_part_wins(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        performance = make_performance("p1", artist="Disclosure b2b Dua Lipa")
        # Containment on the full billing (131) loses to the exact split hit (141).
        assert scorer.score_performance(performance, sample_profile).score == 141

    def test_early_exit_skips_lower_tiers(self, scorer: MatchScorer) -> None:
        profile = UserProfile(
            top_artists=[TopArtist(name="Big Thief", rank=30)],
            related_artists=[RelatedArtist(name="Big Thief", related_to="Phoebe Bridgers")],
            top_genres=["indie"],
        )
        result = scorer.score(["Big Thief"], ["indie"], profile)
        assert result.match_type is MatchType.DIRECT_ARTIST
        assert result.score == 100

    def test_max_top_artists_cap(self, sample_profile: UserProfile, tables) -> None:  # noqa: ANN001
        capped = build_match_scorer(tables, max_top_artists=1)
        result = capped.score(["Dua Lipa"], [], sample_profile)
        assert result.match_type is MatchType.DISCOVERY


# ======================================================================
# Lower tiers
# ======================================================================


class TestLowerTiers:
    def test_related_artist(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        result = scorer.score(["Big Thief"], ["indie folk"], sample_profile)
        assert result.match_type is MatchType.RELATED_ARTIST
        assert result.score == 70
        assert result.reasons == ["Similar to Phoebe Bridgers you listen to"]

    def test_recently_played(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        result = scorer.score(["Khruangbin"], ["indie"], sample_profile)
        # 60 is not below the genre ceiling, so the genre tier never runs.
        assert result.match_type is MatchType.RECENTLY_PLAYED
        assert result.score == 60
        assert result.reasons == ["You recently played Khruangbin"]

    def test_direct_genre(self, scorer: MatchScorer) -> None:
        profile = UserProfile(top_genres=["indie"])
        result = scorer.score(["Some New Band"], ["indie rock"], profile)
        assert result.match_type is MatchType.GENRE
        assert result.score == 30
        assert result.confidence == GENRE_DIRECT_CONFIDENCE
        assert result.reasons == ["Matches your indie rock taste"]

    def test_affinity_genre(self, scorer: MatchScorer) -> None:
        profile = UserProfile(top_genres=["folk"])
        result = scorer.score(["Some New Band"], ["americana"], profile)
        assert result.match_type is MatchType.GENRE
        assert result.score == 21
        assert result.confidence == GENRE_AFFINITY_CONFIDENCE
        assert result.reasons == ["You might like this americana show"]

    def test_strong_fuzzy_direct_hit_skips_related_tier(self, scorer: MatchScorer) -> None:
        profile = UserProfile(
            top_artists=[TopArtist(name="Radiohead", rank=40)],
            related_artists=[RelatedArtist(name="Radiohed", related_to="Thom Yorke")],
        )
        result = scorer.score(["Radiohed"], [], profile)
        # Direct fuzzy hit: round(100 * 8/9) = 89 >= 80, so the related tier is skipped.
        assert result.match_type is MatchType.DIRECT_ARTIST
        assert result.score == 89


# ======================================================================
# Discovery fallback
# ======================================================================


class TestDiscovery:
    def test_no_signal(self, scorer: MatchScorer, sample_profile: UserProfile) -> None:
        result = scorer.score(["Unknown Locals"], ["polka"], sample_profile)
        assert result.match_type is MatchType.DISCOVERY
        assert result.score == 0
        assert result.confidence == 0.0
        assert result.reasons == [DISCOVERY_REASON]

    def test_punctuation_only_top_artist(self, scorer: MatchScorer) -> None:
        profile = UserProfile(top_artists=[TopArtist(name="!!!", rank=1)])
        result = scorer.score(["!!!"], [], profile)
        assert result.match_type is MatchType.DIRECT_ARTIST
        assert result.score > 100

    def test_empty_everything(self, scorer: MatchScorer) -> None:
        result = scorer.score([], [], UserProfile())
        assert result.match_type is MatchType.DISCOVERY
        assert result.reasons == [DISCOVERY_REASON]


# ======================================================================
# Lineup scoring
# ======================================================================


class TestScoreLineup:
    def test_preserves_order(self, scorer: MatchScorer, sample_lineup, sample_profile) -> None:  # noqa: ANN001
        scored = scorer.score_lineup(sample_lineup, sample_profile)
        assert [entry.performance.id for entry in scored] == [p.id for p in sample_lineup]
        assert [entry.match_type for entry in scored] == [
            MatchType.DIRECT_ARTIST,
            MatchType.RELATED_ARTIST,
            MatchType.RECENTLY_PLAYED,
            MatchType.DIRECT_ARTIST,
            MatchType.DISCOVERY,
            MatchType.DISCOVERY,
        ]

    def test_pure_function(self, scorer: MatchScorer, sample_lineup, sample_profile) -> None:  # noqa: ANN001
        assert scorer.score_lineup(sample_lineup, sample_profile) == scorer.score_lineup(
            sample_lineup, sample_profile
        )
