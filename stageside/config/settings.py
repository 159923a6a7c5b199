"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (priority order):
#
#   1. **Environment variables** — e.g. STAGESIDE_MAX_PER_DAY=6
#   2. **.env file** — key=value lines in the project root .env file
#
# Field ``max_per_day`` maps to ``STAGESIDE_MAX_PER_DAY`` (the prefix keeps
# the engine's knobs from colliding with host-application variables).
# ``APP_ENV`` and ``LOG_LEVEL`` are read unprefixed so they line up with
# the logging setup in stageside.utils.logging.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stageside.models.schedule import ItineraryOptions


class Settings(BaseSettings):
    """Stageside engine settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STAGESIDE_",
        extra="ignore",
        populate_by_name=True,
    )

    # === App Config ===
    app_env: str = Field(default="development", validation_alias=AliasChoices("APP_ENV", "STAGESIDE_APP_ENV"))
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "STAGESIDE_LOG_LEVEL"))

    # === Itinerary defaults ===
    max_per_day: int = 8
    include_discoveries: bool = True
    rest_break_minutes: int = 90

    # === Scoring bounds ===
    # Callers cap the top-artist list so scoring stays O(performances x 30).
    max_top_artists: int = 30

    # === Matching tables ===
    # Empty = built-in tables from stageside.config.domain_knowledge.
    matching_tables_path: str = ""

    def itinerary_options(self) -> ItineraryOptions:
        """Default itinerary options derived from these settings."""
        return ItineraryOptions(
            max_per_day=self.max_per_day,
            include_discoveries=self.include_discoveries,
            rest_break_minutes=self.rest_break_minutes,
        )
