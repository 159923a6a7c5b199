"""Unit tests for merging per-service listening data into a profile."""

from __future__ import annotations

import pytest

from stageside.models.profile import MusicService, RelatedArtist, ServiceArtist, ServiceProfile
from stageside.services.profile_aggregator import (
    aggregate_artists,
    aggregate_genres,
    build_user_profile,
)


def _service(service: MusicService, artists: list[str], **kwargs) -> ServiceProfile:  # noqa: ANN003
    return ServiceProfile(service=service, artists=[ServiceArtist(name=name) for name in artists], **kwargs)


class TestAggregateArtists:
    def test_cross_service_artist_accumulates(self) -> None:
        merged = aggregate_artists(
            [
                _service(MusicService.SPOTIFY, ["Tame Impala", "The xx"]),
                _service(MusicService.APPLE_MUSIC, ["xx"]),
            ]
        )
        assert [artist.name for artist in merged] == ["The xx", "Tame Impala"]
        # 99 * 1.0 + 100 * 0.95
        assert merged[0].score == pytest.approx(194.0)
        assert merged[0].sources == [MusicService.SPOTIFY, MusicService.APPLE_MUSIC]
        assert merged[0].normalized_name == "the xx"

    def test_fuller_spelling_wins(self) -> None:
        merged = aggregate_artists(
            [
                _service(MusicService.SPOTIFY, ["xx"]),
                _service(MusicService.TIDAL, ["The xx"]),
            ]
        )
        assert len(merged) == 1
        assert merged[0].name == "The xx"

    def test_service_ids_and_genres_merged(self) -> None:
        merged = aggregate_artists(
            [
                ServiceProfile(
                    service=MusicService.SPOTIFY,
                    artists=[ServiceArtist(name="Bonobo", id="sp1", genres=["Downtempo"])],
                ),
                ServiceProfile(
                    service=MusicService.DEEZER,
                    artists=[ServiceArtist(name="Bonobo", id="dz9", genres=["downtempo", "Electronica"])],
                ),
            ]
        )
        assert merged[0].source_ids == {"spotify": "sp1", "deezer": "dz9"}
        assert merged[0].genres == ["Downtempo", "Electronica"]

    def test_position_floor(self) -> None:
        names = [f"{i:03d}" for i in range(120)]
        merged = aggregate_artists([_service(MusicService.SPOTIFY, names)])
        assert merged[-1].score == pytest.approx(10.0)


class TestAggregateGenres:
    def test_weighted_and_lowercased(self) -> None:
        genres = aggregate_genres(
            [
                ServiceProfile(service=MusicService.SPOTIFY, genres=["Indie", "Rock"]),
                ServiceProfile(service=MusicService.YOUTUBE_MUSIC, genres=["rock"]),
            ]
        )
        # rock: 19 + 20 * 0.7 = 33 beats indie: 20
        assert genres == ["rock", "indie"]

    def test_blank_genres_dropped(self) -> None:
        assert aggregate_genres([ServiceProfile(service=MusicService.TIDAL, genres=["  ", "jazz"])]) == ["jazz"]


class TestBuildUserProfile:
    def test_ranks_recent_and_related(self) -> None:
        related = RelatedArtist(name="Big Thief", related_to="Phoebe Bridgers")
        profile = build_user_profile(
            [
                _service(
                    MusicService.SPOTIFY,
                    ["Phoebe Bridgers", "Bonobo"],
                    recent_artists=["Khruangbin", "Bonobo"],
                    related_artists=[related],
                    genres=["indie"],
                ),
                _service(MusicService.APPLE_MUSIC, [], recent_artists=["khruangbin!", "Caribou"]),
            ]
        )
        assert [(artist.name, artist.rank) for artist in profile.top_artists] == [
            ("Phoebe Bridgers", 1),
            ("Bonobo", 2),
        ]
        assert profile.recently_played == ["Khruangbin", "Bonobo", "Caribou"]
        assert profile.related_artists == [related]
        assert profile.top_genres == ["indie"]

    def test_no_services(self) -> None:
        profile = build_user_profile([])
        assert profile.top_artists == []
        assert profile.top_genres == []
