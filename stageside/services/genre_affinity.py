"""Genre overlap between a performance and a listener.

Two levels of overlap are recognised:

- **direct**   — a performance genre equals, contains, or is contained by a
                 listener genre ("indie rock" vs "indie").  Scores
                 ``min(40, 20 + 10 * hits)`` where every matching
                 (performance genre, listener genre) pair counts as a hit.
- **affinity** — no direct overlap, but a listener genre's affinity row
                 lists a related genre that overlaps a performance genre.
                 Scores ``round(25 * strength)``.

Affinity rows are consulted in listener-genre order and the FIRST hit is
returned, even if a later listener genre would score higher.  This keeps
parity with the scores users already see; it is a known candidate for a
"best hit wins" change.
"""

from __future__ import annotations

from collections.abc import Sequence

from stageside.config.domain_knowledge import GenreAffinity, MatchingTables
from stageside.models.match import GenreMatch, GenreMatchType
from stageside.utils.confidence import round_score

DIRECT_BASE_SCORE = 20
DIRECT_PER_MATCH_SCORE = 10
DIRECT_MAX_SCORE = 40
AFFINITY_MAX_SCORE = 25

NO_GENRE_MATCH = GenreMatch(score=0, matched_genres=[], type=GenreMatchType.NONE)


def _overlaps(first: str, second: str) -> bool:
    return first == second or first in second or second in first


class GenreAffinityResolver:
    """Resolves direct and affinity genre matches against injected tables."""

    def __init__(self, tables: MatchingTables) -> None:
        self._affinities: dict[str, GenreAffinity] = {
            entry.genre: entry for entry in tables.genre_affinities
        }

    def resolve(self, performance_genres: Sequence[str], user_genres: Sequence[str]) -> GenreMatch:
        """Compare performance genres against listener genres.

        Parameters
        ----------
        performance_genres:
            Genre tags on the lineup entry.
        user_genres:
            The listener's top genres, in the aggregator's frequency order.

        Returns
        -------
        GenreMatch
            ``direct`` / ``affinity`` / ``none`` with its score and the
            performance genres that matched (lower-cased).
        """
        show_genres = [genre.strip().lower() for genre in performance_genres if genre.strip()]
        listener_genres = [genre.strip().lower() for genre in user_genres if genre.strip()]
        if not show_genres or not listener_genres:
            return NO_GENRE_MATCH

        direct_matches = [
            show_genre
            for show_genre in show_genres
            for listener_genre in listener_genres
            if _overlaps(show_genre, listener_genre)
        ]
        if direct_matches:
            score = min(
                DIRECT_MAX_SCORE,
                DIRECT_BASE_SCORE + DIRECT_PER_MATCH_SCORE * len(direct_matches),
            )
            return GenreMatch(score=score, matched_genres=direct_matches, type=GenreMatchType.DIRECT)

        for listener_genre in listener_genres:
            affinity = self._affinities.get(listener_genre)
            if affinity is None:
                continue
            for show_genre in show_genres:
                if any(_overlaps(show_genre, related) for related in affinity.related):
                    return GenreMatch(
                        score=round_score(AFFINITY_MAX_SCORE * affinity.strength),
                        matched_genres=[show_genre],
                        type=GenreMatchType.AFFINITY,
                    )

        return NO_GENRE_MATCH
