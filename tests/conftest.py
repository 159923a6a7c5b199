"""Shared pytest fixtures for the Stageside test suite."""

from __future__ import annotations

import datetime
from pathlib import Path

import pytest

from stageside.config.domain_knowledge import DEFAULT_MATCHING_TABLES, MatchingTables
from stageside.models.lineup import Festival, Performance
from stageside.models.match import MatchResult, MatchType, ScoredPerformance
from stageside.models.profile import RelatedArtist, TopArtist, UserProfile
from stageside.services import build_match_scorer
from stageside.services.genre_affinity import GenreAffinityResolver
from stageside.services.match_scorer import MatchScorer
from stageside.services.name_matcher import NameMatcher

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_performance(
    perf_id: str,
    artist: str = "Some Act",
    day: str | None = "Saturday",
    start: str | None = "18:00",
    end: str | None = "19:00",
    stage: str | None = "Main Stage",
    genres: list[str] | None = None,
) -> Performance:
    return Performance(
        id=perf_id,
        artist_name=artist,
        day=day,
        stage=stage,
        start_time=start,
        end_time=end,
        genres=genres or [],
    )


def make_scored(
    performance: Performance,
    score: int,
    match_type: MatchType = MatchType.GENRE,
    reason: str = "Matches your indie taste",
) -> ScoredPerformance:
    return ScoredPerformance(
        performance=performance,
        match=MatchResult(score=score, reasons=[reason], match_type=match_type, confidence=0.7),
    )


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def tables() -> MatchingTables:
    return DEFAULT_MATCHING_TABLES


@pytest.fixture
def name_matcher(tables: MatchingTables) -> NameMatcher:
    return NameMatcher(tables)


@pytest.fixture
def genre_resolver(tables: MatchingTables) -> GenreAffinityResolver:
    return GenreAffinityResolver(tables)


@pytest.fixture
def scorer(tables: MatchingTables) -> MatchScorer:
    return build_match_scorer(tables)


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_profile() -> UserProfile:
    """A listener with a few top artists, one related act and indie taste."""
    return UserProfile(
        top_artists=[
            TopArtist(name="Phoebe Bridgers", rank=1),
            TopArtist(name="Dua Lipa", rank=3),
            TopArtist(name="Kanye West", rank=12),
            TopArtist(name="Fleet Foxes", rank=25),
        ],
        related_artists=[RelatedArtist(name="Big Thief", related_to="Phoebe Bridgers")],
        recently_played=["Khruangbin"],
        top_genres=["indie", "folk"],
    )


@pytest.fixture
def sample_festival() -> Festival:
    return Festival(
        id="fest-1",
        name="Riverside Sounds",
        start_date=datetime.date(2026, 7, 24),
        end_date=datetime.date(2026, 7, 26),
        days=["Friday", "Saturday", "Sunday"],
        city="Portland",
        venue="Waterfront Park",
    )


@pytest.fixture
def sample_lineup() -> list[Performance]:
    """Two days of sets with one deliberate clash on Saturday evening."""
    return [
        make_performance("p1", "Phoebe Bridgers", "Saturday", "20:00", "21:30", "Main Stage", ["indie"]),
        make_performance("p2", "Big Thief", "Saturday", "21:00", "22:00", "River Stage", ["indie folk"]),
        make_performance("p3", "Khruangbin", "Saturday", "17:00", "18:00", "River Stage", ["psychedelic"]),
        make_performance("p4", "Ye", "Friday", "22:00", "23:30", "Main Stage", ["hip-hop"]),
        make_performance("p5", "Unknown Locals", "Friday", "15:00", "15:45", "Tent", ["polka"]),
        make_performance("p6", "Secret Guest", None, None, None, None, []),
    ]
