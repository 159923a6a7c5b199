"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   0. Settings defaults   — Field defaults in settings.py
#   1. config/config.yaml  — Static defaults checked into the repo
#   2. .env file           — Local developer overrides (not committed)
#   3. Environment vars    — Set at deploy time
#
# Only settings that were actually set (env, .env, constructor) override
# the YAML file; untouched fields never mask it.
#
# Matching tables follow their own path: the built-in tables in
# domain_knowledge.py are used unless matching_tables.path (or
# STAGESIDE_MATCHING_TABLES_PATH) points at a YAML file shaped like:
#
#   genre_affinities:
#     rock: {related: [alternative, indie rock], strength: 0.8}
#   aliases:
#     Kanye West: [Ye, Kanye]
#
# Tables are validated once at load; a malformed file raises
# ConfigurationError immediately instead of producing odd scores later.
# ──────────────────────────────────────────────────────────────────────
"""

from collections.abc import Iterable
from pathlib import Path

import yaml

from stageside.config.domain_knowledge import DEFAULT_MATCHING_TABLES, MatchingTables
from stageside.config.settings import Settings
from stageside.utils.errors import ConfigurationError
from stageside.utils.logging import get_logger

logger = get_logger(__name__)


# Settings field -> (section, key) in the merged config dict.
_SETTINGS_KEYS: dict[str, tuple[str, str]] = {
    "app_env": ("app", "env"),
    "max_per_day": ("itinerary", "max_per_day"),
    "include_discoveries": ("itinerary", "include_discoveries"),
    "rest_break_minutes": ("itinerary", "rest_break_minutes"),
    "max_top_artists": ("scoring", "max_top_artists"),
    "matching_tables_path": ("matching_tables", "path"),
    "log_level": ("logging", "level"),
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge it with environment-based Settings.

    Settings defaults sit below the YAML file; values actually set through
    the environment, a .env file or constructor arguments override it.

    Args:
        path: Path to the YAML configuration file.  A missing file is skipped.
        settings: Pre-built settings; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping.
    """
    config_path = Path(path)
    yaml_config: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(message=f"Cannot load config: {exc}", source=str(config_path)) from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(message="Top level must be a mapping", source=str(config_path))

    settings = settings or Settings()
    config = _settings_tree(settings, _SETTINGS_KEYS)
    _deep_merge(config, yaml_config)
    _deep_merge(config, _settings_tree(settings, _SETTINGS_KEYS.keys() & settings.model_fields_set))
    return config


def _settings_tree(settings: Settings, fields: Iterable[str]) -> dict:
    tree: dict = {}
    for field in fields:
        section, key = _SETTINGS_KEYS[field]
        tree.setdefault(section, {})[key] = getattr(settings, field)
    return tree


def load_matching_tables(path: str | Path | None = None) -> MatchingTables:
    """Load genre affinity and alias tables from YAML.

    Args:
        path: YAML file to read.  ``None`` or empty returns the built-in tables.

    Returns:
        Validated, immutable matching tables.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            its tables are structurally invalid.
    """
    if not path:
        return DEFAULT_MATCHING_TABLES

    table_path = Path(path)
    source = str(table_path)
    try:
        with open(table_path, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(message=f"Cannot read matching tables: {exc}", source=source) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(message=f"Invalid YAML: {exc}", source=source) from exc

    if not isinstance(document, dict):
        raise ConfigurationError(message="Top level must be a mapping", source=source)

    genre_affinities = document.get("genre_affinities") or {}
    aliases = document.get("aliases") or {}
    if not isinstance(genre_affinities, dict) or not isinstance(aliases, dict):
        raise ConfigurationError(
            message="'genre_affinities' and 'aliases' must be mappings",
            source=source,
        )

    tables = MatchingTables.from_mappings(genre_affinities, aliases, source=source)
    logger.info(
        "matching_tables_loaded",
        path=source,
        genre_count=len(tables.genre_affinities),
        alias_count=len(tables.aliases),
    )
    return tables


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
