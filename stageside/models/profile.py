"""Listener profile models.

A :class:`UserProfile` is the merged view of a listener's taste that the
match scorer consumes.  It is produced upstream by the profile aggregator
(see :mod:`stageside.services.profile_aggregator`) from one
:class:`ServiceProfile` per connected streaming service.

All models use frozen config: profiles are request-scoped snapshots and
are never mutated once built.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TopArtist(BaseModel):
    """An artist from the listener's ranked most-listened list (rank 1 = most)."""

    model_config = ConfigDict(frozen=True)

    name: str
    rank: int = Field(ge=1)


class RelatedArtist(BaseModel):
    """An artist considered similar to one of the listener's top artists.

    ``related_to`` is the top artist that produced the suggestion and is
    quoted verbatim in the match reason ("Similar to X you listen to").
    """

    model_config = ConfigDict(frozen=True)

    name: str
    related_to: str


class UserProfile(BaseModel):
    """Merged listening profile for one user.

    ``top_genres`` arrives deduplicated and frequency-sorted from the
    aggregator; the scorer never re-sorts it.  Duplicate names are tolerated
    in every list.
    """

    model_config = ConfigDict(frozen=True)

    top_artists: list[TopArtist] = Field(default_factory=list)
    related_artists: list[RelatedArtist] = Field(default_factory=list)
    recently_played: list[str] = Field(default_factory=list)
    top_genres: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-service inputs for the profile aggregator.
# ---------------------------------------------------------------------------

class MusicService(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Streaming services a listener can connect."""

    SPOTIFY = "spotify"
    APPLE_MUSIC = "apple_music"
    YOUTUBE_MUSIC = "youtube_music"
    TIDAL = "tidal"
    DEEZER = "deezer"


class ServiceArtist(BaseModel):
    """One artist entry from a service's top-artists list."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: str | None = None
    genres: list[str] = Field(default_factory=list)


class ServiceProfile(BaseModel):
    """Listening data pulled from a single streaming service.

    ``artists`` and ``genres`` are in the service's own ranking order.
    """

    model_config = ConfigDict(frozen=True)

    service: MusicService
    artists: list[ServiceArtist] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    recent_artists: list[str] = Field(default_factory=list)
    related_artists: list[RelatedArtist] = Field(default_factory=list)


class AggregatedArtist(BaseModel):
    """An artist merged across services, with a weighted popularity score."""

    model_config = ConfigDict(frozen=True)

    name: str
    normalized_name: str
    score: float
    genres: list[str] = Field(default_factory=list)
    sources: list[MusicService] = Field(default_factory=list)
    source_ids: dict[str, str] = Field(default_factory=dict)
