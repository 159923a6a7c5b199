"""Unit tests for the genre affinity resolver."""

from __future__ import annotations

from stageside.config.domain_knowledge import MatchingTables
from stageside.models.match import GenreMatchType
from stageside.services.genre_affinity import NO_GENRE_MATCH, GenreAffinityResolver


class TestDirectMatch:
    def test_containment_counts_as_direct(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["indie rock"], ["indie"])
        assert result.type is GenreMatchType.DIRECT
        assert result.score == 30
        assert result.matched_genres == ["indie rock"]

    def test_each_pair_is_a_hit(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["indie folk"], ["indie", "folk"])
        assert result.score == 40
        assert result.matched_genres == ["indie folk", "indie folk"]

    def test_score_capped_at_40(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["rock", "punk rock", "indie rock"], ["rock"])
        assert result.score == 40

    def test_case_and_whitespace_insensitive(self, genre_resolver: GenreAffinityResolver) -> None:
        assert genre_resolver.resolve(["  Techno "], ["TECHNO"]).type is GenreMatchType.DIRECT


class TestAffinityMatch:
    def test_related_genre(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["americana"], ["folk"])
        assert result.type is GenreMatchType.AFFINITY
        # round(25 * 0.85) = 21
        assert result.score == 21
        assert result.matched_genres == ["americana"]

    def test_half_rounds_up(self, genre_resolver: GenreAffinityResolver) -> None:
        # 25 * 0.9 = 22.5
        assert genre_resolver.resolve(["funk"], ["soul"]).score == 23

    def test_first_listener_genre_wins(self, genre_resolver: GenreAffinityResolver) -> None:
        # singer-songwriter (0.85) is consulted before acoustic (0.9).
        result = genre_resolver.resolve(["folk"], ["singer-songwriter", "acoustic"])
        assert result.score == 21

    def test_listener_genre_without_row_skipped(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["americana"], ["vaporwave", "folk"])
        assert result.type is GenreMatchType.AFFINITY

    def test_injected_tables(self) -> None:
        resolver = GenreAffinityResolver(
            MatchingTables.from_mappings({"shoegaze": {"related": ["dream pop"], "strength": 1.0}}, {})
        )
        assert resolver.resolve(["dream pop"], ["shoegaze"]).score == 25
        assert resolver.resolve(["americana"], ["folk"]) == NO_GENRE_MATCH


class TestNoMatch:
    def test_empty_inputs(self, genre_resolver: GenreAffinityResolver) -> None:
        assert genre_resolver.resolve([], ["rock"]) == NO_GENRE_MATCH
        assert genre_resolver.resolve(["rock"], []) == NO_GENRE_MATCH
        assert genre_resolver.resolve(["  "], ["rock"]) == NO_GENRE_MATCH

    def test_unrelated(self, genre_resolver: GenreAffinityResolver) -> None:
        result = genre_resolver.resolve(["polka"], ["techno"])
        assert result.type is GenreMatchType.NONE
        assert result.score == 0
