"""Score arithmetic shared by the genre resolver and the match scorer.

Scores are integers derived from 0.0--1.0 confidences.  Rounding is
half-up (``87.5 -> 88``), matching the scores the web app has always
shown; Python's built-in :func:`round` would give banker's rounding.
"""

import math


def round_score(value: float) -> int:
    """Round a non-negative score half-up to the nearest integer."""
    return math.floor(value + 0.5)
