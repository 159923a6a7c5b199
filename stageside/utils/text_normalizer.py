"""Text normalization utilities for artist names.

Two concerns live here:

1. **Comparison keys** -- :func:`normalize_artist_name` folds case,
   apostrophe variants, punctuation and whitespace so that names coming
   from different ticketing and streaming services can be compared
   directly.  The fold is idempotent.

2. **Similarity** -- :func:`string_similarity` turns a Levenshtein edit
   distance (computed by rapidfuzz) into a 0.0--1.0 similarity, and
   :func:`is_same_artist` applies the looser identity rules used when
   merging listening history from several services.

Billing strings that carry more than one act ("A b2b B", "A feat. B")
are split by :func:`split_artist_names`.
"""

import re

from rapidfuzz.distance import Levenshtein

# Typographic apostrophes, backtick and acute accent all fold to "'".
_APOSTROPHES = re.compile(r"[‘’‛ʼ´`]")
_DISALLOWED = re.compile(r"[^a-z0-9\s']")
_WHITESPACE = re.compile(r"\s+")
_LEADING_THE = re.compile(r"^the\s+")


def normalize_artist_name(name: str) -> str:
    """Canonicalize an artist name for comparison.

    Lowercases, unifies apostrophe variants, strips every character
    outside ``[a-z0-9 ']``, collapses whitespace runs and trims, so
    ``"Guns N’ Roses!"`` and ``"guns  n' roses"`` both become
    ``"guns n' roses"``.

    Args:
        name: Raw artist name string.

    Returns:
        Normalized comparison key (possibly empty).
    """
    normalized = _APOSTROPHES.sub("'", name.lower())
    normalized = _DISALLOWED.sub("", normalized)
    normalized = _WHITESPACE.sub(" ", normalized)
    return normalized.strip()


def string_similarity(first: str, second: str) -> float:
    """Return ``(max_len - edit_distance) / max_len`` for two strings.

    Two empty strings are identical (1.0).

    Args:
        first: First string (already normalized by the caller).
        second: Second string (already normalized by the caller).

    Returns:
        Similarity in [0.0, 1.0].
    """
    max_len = max(len(first), len(second))
    if max_len == 0:
        return 1.0
    distance = Levenshtein.distance(first, second)
    return (max_len - distance) / max_len


def is_same_artist(first: str, second: str) -> bool:
    """Loose identity check used to merge artists across streaming services.

    Looser than the recommendation matcher: a leading "The" is ignored,
    containment only needs a 4 character name, and names longer than 5
    characters may differ by up to 20% of their length.

    Args:
        first: Artist name as reported by one service.
        second: Artist name as reported by another service.

    Returns:
        True when both names likely denote the same artist.
    """
    norm_first = _LEADING_THE.sub("", normalize_artist_name(first))
    norm_second = _LEADING_THE.sub("", normalize_artist_name(second))
    if not norm_first or not norm_second:
        return False

    if norm_first == norm_second:
        return True

    shorter = norm_first if len(norm_first) < len(norm_second) else norm_second
    if len(shorter) >= 4 and (norm_first in norm_second or norm_second in norm_first):
        return True

    if len(norm_first) > 5 and len(norm_second) > 5:
        distance = Levenshtein.distance(norm_first, norm_second)
        return distance / max(len(norm_first), len(norm_second)) < 0.2

    return False


# Splits on the separators lineups use for shared billings:
# "b2b", "vs", "&", "feat.", "ft.", "featuring" and commas.
_SEPARATOR_PATTERN = re.compile(
    r"\s+b2b\s+|\s+vs\.?\s+|\s+&\s+|\s+feat\.?\s+"
    r"|\s+ft\.?\s+|\s+featuring\s+|,\s*",
    re.IGNORECASE,
)


def split_artist_names(raw: str) -> list[str]:
    """Split a billing string into individual artist names.

    ``"Disclosure b2b Kaytranada, Channel Tres"`` ->
    ``["Disclosure", "Kaytranada", "Channel Tres"]``.

    Args:
        raw: Billing string potentially containing multiple names.

    Returns:
        List of individual artist names, stripped of whitespace.
    """
    parts = _SEPARATOR_PATTERN.split(raw)
    return [part.strip() for part in parts if part.strip()]
