"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from stageside.config.settings import Settings
from stageside.models.schedule import ItineraryOptions

_ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "STAGESIDE_APP_ENV",
    "STAGESIDE_LOG_LEVEL",
    "STAGESIDE_MAX_PER_DAY",
    "STAGESIDE_INCLUDE_DISCOVERIES",
    "STAGESIDE_REST_BREAK_MINUTES",
    "STAGESIDE_MAX_TOP_ARTISTS",
    "STAGESIDE_MATCHING_TABLES_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.app_env == "development"
        assert settings.log_level == "INFO"
        assert settings.max_per_day == 8
        assert settings.include_discoveries is True
        assert settings.rest_break_minutes == 90
        assert settings.max_top_artists == 30
        assert settings.matching_tables_path == ""

    def test_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STAGESIDE_MAX_PER_DAY", "5")
        monkeypatch.setenv("STAGESIDE_INCLUDE_DISCOVERIES", "false")
        settings = Settings(_env_file=None)
        assert settings.max_per_day == 5
        assert settings.include_discoveries is False

    def test_unprefixed_app_env_and_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.app_env == "production"
        assert settings.log_level == "DEBUG"

    def test_itinerary_options(self) -> None:
        settings = Settings(_env_file=None, max_per_day=4, rest_break_minutes=30)
        assert settings.itinerary_options() == ItineraryOptions(
            max_per_day=4,
            include_discoveries=True,
            rest_break_minutes=30,
        )
