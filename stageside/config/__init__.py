"""Configuration module — exports Settings, the loaders and the built-in matching tables."""

from stageside.config.domain_knowledge import DEFAULT_MATCHING_TABLES, MatchingTables
from stageside.config.loader import load_config, load_matching_tables
from stageside.config.settings import Settings

__all__ = [
    "DEFAULT_MATCHING_TABLES",
    "MatchingTables",
    "Settings",
    "load_config",
    "load_matching_tables",
]
