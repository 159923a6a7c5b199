"""Merge listening data from several streaming services into one profile.

Each connected service reports its own ranked top artists, genres and
recently played names.  Services differ in data quality, so every
contribution is weighted by the service before the lists are merged:

    artist score = max(100 - position, 10) * service weight
    genre score  = max(20 - position, 1)   * service weight

Artists reported by several services accumulate score and are
identified with the loose :func:`is_same_artist` rules (leading "The",
"feat." suffixes and small typos are tolerated).  The merged, ranked result
feeds :class:`~stageside.models.profile.UserProfile`.
"""

from __future__ import annotations

from collections.abc import Sequence

from stageside.models.profile import (
    AggregatedArtist,
    MusicService,
    RelatedArtist,
    ServiceProfile,
    TopArtist,
    UserProfile,
)
from stageside.utils.logging import get_logger
from stageside.utils.text_normalizer import is_same_artist, normalize_artist_name

logger = get_logger(__name__)

SERVICE_WEIGHTS: dict[MusicService, float] = {
    MusicService.SPOTIFY: 1.0,
    MusicService.APPLE_MUSIC: 0.95,
    MusicService.TIDAL: 0.9,
    MusicService.DEEZER: 0.85,
    # Scraped rather than API-provided; least reliable.
    MusicService.YOUTUBE_MUSIC: 0.7,
}

MAX_ARTISTS = 200
MAX_GENRES = 30
MAX_RECENT_PER_SERVICE = 20


def _merge_genres(existing: Sequence[str], incoming: Sequence[str]) -> list[str]:
    """Case-insensitive union; the first spelling seen wins."""
    merged = list(existing)
    seen = {genre.lower() for genre in existing}
    for genre in incoming:
        if genre.lower() not in seen:
            seen.add(genre.lower())
            merged.append(genre)
    return merged


def aggregate_artists(profiles: Sequence[ServiceProfile]) -> list[AggregatedArtist]:
    """Merge per-service top artists into one list, best first."""
    merged: list[dict] = []

    for profile in profiles:
        weight = SERVICE_WEIGHTS[profile.service]
        for position, artist in enumerate(profile.artists):
            weighted = max(100 - position, 10) * weight
            existing = next((item for item in merged if is_same_artist(artist.name, item["name"])), None)
            if existing is None:
                merged.append(
                    {
                        "name": artist.name,
                        "normalized_name": normalize_artist_name(artist.name),
                        "score": weighted,
                        "genres": list(artist.genres),
                        "sources": [profile.service],
                        "source_ids": {profile.service.value: artist.id} if artist.id else {},
                    }
                )
                continue

            existing["score"] += weighted
            if profile.service not in existing["sources"]:
                existing["sources"].append(profile.service)
            if artist.genres:
                existing["genres"] = _merge_genres(existing["genres"], artist.genres)
            if artist.id and profile.service.value not in existing["source_ids"]:
                existing["source_ids"][profile.service.value] = artist.id
            # Prefer the fuller spelling ("The xx" over "xx").
            if len(artist.name) > len(existing["name"]):
                existing["name"] = artist.name
                existing["normalized_name"] = normalize_artist_name(artist.name)

    # sorted() is stable: equal scores keep first-seen order.
    ranked = sorted(merged, key=lambda item: -item["score"])[:MAX_ARTISTS]
    return [AggregatedArtist(**item) for item in ranked]


def aggregate_genres(profiles: Sequence[ServiceProfile]) -> list[str]:
    """Weighted, lower-cased, deduplicated genre list (most listened first)."""
    totals: dict[str, float] = {}
    for profile in profiles:
        weight = SERVICE_WEIGHTS[profile.service]
        for position, genre in enumerate(profile.genres):
            key = genre.strip().lower()
            if not key:
                continue
            totals[key] = totals.get(key, 0.0) + max(20 - position, 1) * weight

    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return [genre for genre, _ in ranked[:MAX_GENRES]]


def build_user_profile(profiles: Sequence[ServiceProfile]) -> UserProfile:
    """Build the scorer's :class:`UserProfile` from every connected service.

    Top artists are ranked 1..N by aggregated score.  Recently played names
    keep first-seen order (at most 20 per service, duplicates dropped) and
    related artists are passed through as reported.
    """
    artists = aggregate_artists(profiles)

    recently_played: list[str] = []
    seen_recent: set[str] = set()
    related: list[RelatedArtist] = []
    for profile in profiles:
        for name in profile.recent_artists[:MAX_RECENT_PER_SERVICE]:
            key = normalize_artist_name(name)
            if key and key not in seen_recent:
                seen_recent.add(key)
                recently_played.append(name)
        related.extend(profile.related_artists)

    user_profile = UserProfile(
        top_artists=[TopArtist(name=artist.name, rank=rank) for rank, artist in enumerate(artists, start=1)],
        related_artists=related,
        recently_played=recently_played,
        top_genres=aggregate_genres(profiles),
    )
    logger.info(
        "user_profile_built",
        services=[profile.service.value for profile in profiles],
        top_artists=len(user_profile.top_artists),
        genres=len(user_profile.top_genres),
        recently_played=len(recently_played),
    )
    return user_profile
