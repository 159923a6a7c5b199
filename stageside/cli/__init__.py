# =============================================================================
# stageside/cli/__init__.py — CLI Module Overview
# =============================================================================
#
# Command-line access to the engine without a web front end.  The planner
# reads two JSON files (a festival lineup and a listener profile), scores
# the lineup, builds an itinerary and prints it.
#
# Architecture Notes:
#   - argparse, not Click/Typer, to keep the dependency list short.
#   - The CLI constructs its own services from Settings; there is no
#     long-lived container because each run is a one-shot script.
# =============================================================================

"""CLI tools for Stageside.

- ``python -m stageside.cli`` / ``python -m stageside.cli.plan`` -- score a
  lineup against a profile and print a festival itinerary.
"""
