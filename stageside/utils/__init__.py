"""Utility modules for Stageside.

Available utility modules (all re-exported here for convenience):

- **errors** -- Exception hierarchy rooted at StagesideError.  The engine
  degrades on bad data; only programmer errors (malformed tables, invalid
  options) and unreadable CLI inputs raise.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Artist-name comparison keys, Levenshtein
  similarity, cross-service identity checks and billing splitting.
- **time_utils** -- "HH:MM" parsing and day-label ordering / dating.
- **confidence** -- Half-up score rounding shared by the services.
"""

# -- Domain exception hierarchy --------------------------------------------
from stageside.utils.errors import ConfigurationError, InputError, StagesideError

# -- Structured logging setup ----------------------------------------------
from stageside.utils.logging import configure_logging, get_logger

# -- Text normalization -----------------------------------------------------
from stageside.utils.text_normalizer import (
    is_same_artist,
    normalize_artist_name,
    split_artist_names,
    string_similarity,
)

# -- Score rounding ---------------------------------------------------------
from stageside.utils.confidence import round_score

# -- Set-time and day-label helpers ----------------------------------------
from stageside.utils.time_utils import (
    format_minutes,
    order_day_labels,
    parse_time_to_minutes,
    resolve_day_date,
)

__all__ = [
    "ConfigurationError",
    "InputError",
    "StagesideError",
    "configure_logging",
    "format_minutes",
    "get_logger",
    "is_same_artist",
    "normalize_artist_name",
    "order_day_labels",
    "parse_time_to_minutes",
    "resolve_day_date",
    "round_score",
    "split_artist_names",
    "string_similarity",
]
