"""Stageside: match a listener's taste against festival lineups and plan the days.

Subpackages:
    - models    -- pydantic models for lineups, profiles, matches and plans
    - config    -- settings, YAML loading and the matching tables
    - services  -- name matching, genre affinity, scoring, grids, itineraries
    - utils     -- errors, logging, text and time helpers
    - cli       -- ``python -m stageside.cli`` planner
"""

__version__ = "0.1.0"
