"""Static domain knowledge used by the matching engine.

# ─── PURPOSE ────────────────────────────────────────────────────────────
#
# Two hand-curated tables drive the fuzzy parts of matching:
#
#   1. GENRE_AFFINITIES — for a listener genre, which performance genres
#      its fans also tend to enjoy, and how strongly (0..1).  Entry order
#      is significant: the genre resolver returns on the FIRST listener
#      genre that has an affinity hit, not the best-scoring one.
#
#   2. ARTIST_ALIASES — canonical artist name -> stage names, nicknames,
#      abbreviations and common misspellings.
#
# The raw dicts are wrapped in an immutable, validated MatchingTables
# object once at import time (DEFAULT_MATCHING_TABLES).  Matchers receive
# a MatchingTables instance through their constructor, so tests and YAML
# overrides (see stageside.config.loader) can swap the data freely.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from stageside.utils.errors import ConfigurationError
from stageside.utils.text_normalizer import normalize_artist_name


# ═════════════════════════════════════════════════════════════════════════
# 1. GENRE AFFINITY MAP
# ═════════════════════════════════════════════════════════════════════════

GENRE_AFFINITIES: dict[str, dict[str, Any]] = {
    # Rock family
    "rock": {"related": ["alternative", "indie rock", "hard rock", "classic rock", "punk rock"], "strength": 0.8},
    "alternative": {"related": ["indie", "rock", "indie rock", "alternative rock", "grunge"], "strength": 0.85},
    "indie": {"related": ["indie rock", "indie pop", "alternative", "folk", "lo-fi"], "strength": 0.85},
    "indie rock": {"related": ["indie", "alternative", "rock", "indie pop", "garage rock"], "strength": 0.9},
    "punk": {"related": ["punk rock", "rock", "hardcore", "pop punk", "alternative"], "strength": 0.8},
    "metal": {"related": ["hard rock", "rock", "heavy metal", "progressive metal"], "strength": 0.75},
    # Electronic family
    "electronic": {"related": ["edm", "house", "techno", "dance", "electronica", "synth"], "strength": 0.85},
    "edm": {"related": ["electronic", "house", "dance", "dubstep", "trance"], "strength": 0.9},
    "house": {"related": ["electronic", "edm", "deep house", "tech house", "dance"], "strength": 0.9},
    "techno": {"related": ["electronic", "house", "minimal", "industrial"], "strength": 0.85},
    # Hip-hop family
    "hip-hop": {"related": ["rap", "hip hop", "trap", "r&b", "urban"], "strength": 0.9},
    "rap": {"related": ["hip-hop", "hip hop", "trap", "r&b", "underground hip hop"], "strength": 0.95},
    "trap": {"related": ["hip-hop", "rap", "southern hip hop"], "strength": 0.85},
    # Pop family
    "pop": {"related": ["indie pop", "synth-pop", "dance pop", "electropop", "art pop"], "strength": 0.8},
    "indie pop": {"related": ["indie", "pop", "dream pop", "indie rock", "synth-pop"], "strength": 0.85},
    "synth-pop": {"related": ["electronic", "pop", "new wave", "synthwave"], "strength": 0.85},
    # R&B / Soul family
    "r&b": {"related": ["soul", "neo-soul", "hip-hop", "contemporary r&b", "urban"], "strength": 0.85},
    "soul": {"related": ["r&b", "neo-soul", "funk", "motown"], "strength": 0.9},
    "neo-soul": {"related": ["soul", "r&b", "jazz", "funk"], "strength": 0.9},
    # Folk / Acoustic family
    "folk": {"related": ["indie folk", "acoustic", "singer-songwriter", "americana", "country"], "strength": 0.85},
    "singer-songwriter": {"related": ["folk", "acoustic", "indie", "americana"], "strength": 0.85},
    "acoustic": {"related": ["folk", "singer-songwriter", "unplugged"], "strength": 0.9},
    # Jazz family
    "jazz": {"related": ["smooth jazz", "jazz fusion", "bebop", "blues", "soul"], "strength": 0.8},
    "blues": {"related": ["jazz", "soul", "rock", "rhythm and blues"], "strength": 0.85},
    # Country family
    "country": {"related": ["americana", "folk", "country rock", "bluegrass", "outlaw country"], "strength": 0.85},
    "americana": {"related": ["folk", "country", "roots", "alt-country"], "strength": 0.9},
    # World / Latin
    "latin": {"related": ["reggaeton", "latin pop", "salsa", "bachata", "cumbia"], "strength": 0.85},
    "reggaeton": {"related": ["latin", "latin trap", "urban latin", "hip-hop"], "strength": 0.9},
}


# ═════════════════════════════════════════════════════════════════════════
# 2. ARTIST ALIAS TABLE
# ═════════════════════════════════════════════════════════════════════════

ARTIST_ALIASES: dict[str, list[str]] = {
    "Kanye West": ["Ye", "Kanye"],
    "The Weeknd": ["Weeknd", "The Weekend"],
    "Post Malone": ["Posty", "Post"],
    "Tyler the Creator": ["Tyler", "Tyler, The Creator"],
    "Childish Gambino": ["Donald Glover"],
    "Bon Iver": ["Boniver"],
    "A$AP Rocky": ["ASAP Rocky", "AAP Rocky"],
    "Joey Bada$$": ["Joey Badass"],
    "Twenty One Pilots": ["21 Pilots", "Twentyone Pilots"],
    "blink-182": ["blink 182", "blink182"],
    "N.E.R.D": ["NERD", "N*E*R*D"],
}


# ═════════════════════════════════════════════════════════════════════════
# 3. VALIDATED, IMMUTABLE TABLES
# ═════════════════════════════════════════════════════════════════════════

class GenreAffinity(BaseModel):
    """One row of the genre affinity table."""

    model_config = ConfigDict(frozen=True)

    genre: str
    related: tuple[str, ...] = Field(min_length=1)
    strength: float = Field(ge=0.0, le=1.0)

    @field_validator("genre")
    @classmethod
    def _genre_key(cls, value: str) -> str:
        key = value.strip().lower()
        if not key:
            raise ValueError("genre key must not be empty")
        return key

    @field_validator("related")
    @classmethod
    def _related_genres(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        related = tuple(genre.strip().lower() for genre in value)
        if any(not genre for genre in related):
            raise ValueError("related genres must not be empty strings")
        return related


class ArtistAlias(BaseModel):
    """A canonical artist name and its known alternative names, normalized."""

    model_config = ConfigDict(frozen=True)

    canonical: str
    aliases: frozenset[str]

    @field_validator("canonical")
    @classmethod
    def _canonical_key(cls, value: str) -> str:
        key = normalize_artist_name(value)
        if not key:
            raise ValueError(f"alias table key {value!r} normalizes to an empty name")
        return key

    @field_validator("aliases")
    @classmethod
    def _alias_names(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(
            normalized for normalized in (normalize_artist_name(alias) for alias in value) if normalized
        )


class MatchingTables(BaseModel):
    """Genre affinity and artist alias data, validated and read-only.

    Structural problems (duplicate keys, strengths outside 0..1, empty
    names) are programmer errors and fail at construction.
    """

    model_config = ConfigDict(frozen=True)

    genre_affinities: tuple[GenreAffinity, ...] = ()
    aliases: tuple[ArtistAlias, ...] = ()

    _alias_index: dict[str, frozenset[str]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _unique_keys(self) -> MatchingTables:
        genres = [entry.genre for entry in self.genre_affinities]
        duplicates = sorted({genre for genre in genres if genres.count(genre) > 1})
        if duplicates:
            raise ValueError(f"duplicate genre affinity keys: {', '.join(duplicates)}")
        canonicals = [entry.canonical for entry in self.aliases]
        duplicates = sorted({name for name in canonicals if canonicals.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate alias table keys: {', '.join(duplicates)}")
        return self

    def model_post_init(self, __context: Any) -> None:
        self._alias_index = {entry.canonical: entry.aliases for entry in self.aliases}

    def aliases_for(self, normalized_name: str) -> frozenset[str]:
        """Known aliases of a canonical name (normalized), or an empty set."""
        return self._alias_index.get(normalized_name, frozenset())

    @classmethod
    def from_mappings(
        cls,
        genre_affinities: Mapping[str, Mapping[str, Any]],
        aliases: Mapping[str, Iterable[str]],
        source: str | None = None,
    ) -> MatchingTables:
        """Build tables from plain dicts (module constants or parsed YAML).

        Raises:
            ConfigurationError: If either table is structurally invalid.
        """
        try:
            return cls(
                genre_affinities=tuple(
                    GenreAffinity(
                        genre=genre,
                        related=_as_tuple(entry["related"]),
                        strength=entry["strength"],
                    )
                    for genre, entry in genre_affinities.items()
                ),
                aliases=tuple(
                    ArtistAlias(canonical=canonical, aliases=frozenset(_as_tuple(names)))
                    for canonical, names in aliases.items()
                ),
            )
        except (ValidationError, KeyError, TypeError, AttributeError) as exc:
            raise ConfigurationError(
                message=f"Malformed matching tables: {exc}",
                source=source,
            ) from exc


def _as_tuple(values: Iterable[str]) -> tuple[str, ...]:
    # A bare string would otherwise be split into single characters.
    if isinstance(values, str):
        raise TypeError(f"expected a list of names, got the string {values!r}")
    return tuple(values)


DEFAULT_MATCHING_TABLES: MatchingTables = MatchingTables.from_mappings(
    GENRE_AFFINITIES,
    ARTIST_ALIASES,
    source="stageside.config.domain_knowledge",
)
