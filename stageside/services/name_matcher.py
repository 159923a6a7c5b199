"""Artist identity matching.

Decides whether two free-text artist names denote the same act and how
sure we are.  Checks run cheapest first and the first hit wins:

    1. exact      — normalized names are equal            -> 1.0
    2. alias      — one is a known alias of the other     -> 0.95
    3. contains   — the shorter (>= 5 chars) is inside the longer,
                    e.g. "Taylor Swift" in "Taylor Swift ft. Ed Sheeran" -> 0.9
    4. fuzzy      — Levenshtein similarity >= 0.85        -> similarity

The quadratic edit-distance step only runs when the cheap checks fail.
All checks are symmetric, so ``matches(a, b) == matches(b, a)``.
"""

from __future__ import annotations

from stageside.config.domain_knowledge import MatchingTables
from stageside.models.match import NameMatch
from stageside.utils.text_normalizer import normalize_artist_name, string_similarity

EXACT_CONFIDENCE = 1.0
ALIAS_CONFIDENCE = 0.95
CONTAINMENT_CONFIDENCE = 0.9
# Catches typos without conflating distinct short names.
FUZZY_THRESHOLD = 0.85
MIN_CONTAINED_LENGTH = 5

NO_MATCH = NameMatch(is_match=False, confidence=0.0)


class NameMatcher:
    """Compares artist names using an injected alias table."""

    def __init__(self, tables: MatchingTables) -> None:
        self._tables = tables

    def matches(self, name_a: str, name_b: str) -> NameMatch:
        """Return whether two names denote the same artist, with confidence.

        Names that normalize to nothing (e.g. pure punctuation such as
        "!!!") only match an identical raw name, compared case-insensitively.
        """
        norm_a = normalize_artist_name(name_a)
        norm_b = normalize_artist_name(name_b)
        if not norm_a or not norm_b:
            raw_a = name_a.strip().casefold()
            if not norm_a and not norm_b and raw_a and raw_a == name_b.strip().casefold():
                return NameMatch(is_match=True, confidence=EXACT_CONFIDENCE)
            return NO_MATCH

        if norm_a == norm_b:
            return NameMatch(is_match=True, confidence=EXACT_CONFIDENCE)

        if norm_b in self._tables.aliases_for(norm_a) or norm_a in self._tables.aliases_for(norm_b):
            return NameMatch(is_match=True, confidence=ALIAS_CONFIDENCE)

        shorter, longer = sorted((norm_a, norm_b), key=len)
        if len(shorter) >= MIN_CONTAINED_LENGTH and shorter in longer:
            return NameMatch(is_match=True, confidence=CONTAINMENT_CONFIDENCE)

        similarity = string_similarity(norm_a, norm_b)
        if similarity >= FUZZY_THRESHOLD:
            return NameMatch(is_match=True, confidence=similarity)

        return NO_MATCH
