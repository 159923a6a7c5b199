# =============================================================================
# stageside/cli/plan.py — CLI Plan Command (Score Lineup + Build Itinerary)
# =============================================================================
#
# Standalone CLI tool for planning a festival from the command line.  It
# runs the whole engine on two local JSON files:
#
#   Step 1: Load       — lineup (festival + performances) and listener profile
#   Step 2: Score      — every performance against the profile
#   Step 3: Summarize  — festival-level match percentage
#   Step 4: Plan       — bounded, non-overlapping per-day itinerary
#   Step 5: Output     — text report or JSON, optional .ics calendar
#
# Typical usage:
#   python -m stageside.cli lineup.json profile.json
#   python -m stageside.cli lineup.json profile.json --json
#   python -m stageside.cli lineup.json profile.json --ics plan.ics --max-per-day 5
#
# Input formats:
#   - Lineup: {"festival": {...}, "performances": [...]} or a bare list
#     of performances (no festival metadata, so no calendar dates).
#   - Profile: a UserProfile object, or {"services": [...]} with one
#     ServiceProfile per streaming service (merged by the aggregator).
#
# The --quiet flag (auto-enabled with --json) sends all structlog and
# stdlib logging to stderr at WARNING+ level, keeping stdout clean for
# the report only.
# =============================================================================

"""Standalone CLI for planning a festival itinerary.

Usage::

    python -m stageside.cli.plan lineup.json profile.json
    python -m stageside.cli.plan lineup.json profile.json --json
    python -m stageside.cli.plan lineup.json profile.json --ics plan.ics

Exits with status 1 when an input file cannot be read or validated.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stageside.config.loader import load_config, load_matching_tables
from stageside.config.settings import Settings
from stageside.models.lineup import Festival, Performance
from stageside.models.match import FestivalMatchSummary
from stageside.models.profile import ServiceProfile, UserProfile
from stageside.models.schedule import Itinerary, ItineraryOptions
from stageside.services import build_match_scorer
from stageside.services.calendar_export import generate_ics
from stageside.services.itinerary_generator import ItineraryGenerator
from stageside.services.presentation import (
    format_match_score,
    generate_vibe_tags,
    summarize_festival_match,
)
from stageside.services.profile_aggregator import build_user_profile
from stageside.utils.errors import ConfigurationError, InputError, StagesideError
from stageside.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Input loading
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(message=f"Cannot read file: {exc.strerror or exc}", source=str(path)) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(message=f"Invalid JSON: {exc}", source=str(path)) from exc


def load_lineup(path: Path) -> tuple[Festival | None, list[Performance]]:
    """Read a lineup file.

    Accepts ``{"festival": {...}, "performances": [...]}`` or a bare list of
    performances.

    Raises:
        InputError: If the file is unreadable or its records are invalid.
    """
    document = _read_json(path)
    if isinstance(document, list):
        festival_data, performance_data = None, document
    elif isinstance(document, dict):
        festival_data = document.get("festival")
        performance_data = document.get("performances", [])
    else:
        raise InputError(message="Lineup must be an object or a list", source=str(path))

    if not isinstance(performance_data, list):
        raise InputError(message="'performances' must be a list", source=str(path))

    try:
        festival = Festival.model_validate(festival_data) if festival_data else None
        performances = [Performance.model_validate(item) for item in performance_data]
    except ValidationError as exc:
        raise InputError(message=f"Invalid lineup: {exc}", source=str(path)) from exc
    return festival, performances


def load_profile(path: Path) -> UserProfile:
    """Read a listener profile file.

    A document with a ``services`` key is treated as per-service listening
    data and merged with :func:`build_user_profile`; anything else must be a
    :class:`UserProfile`.

    Raises:
        InputError: If the file is unreadable or its records are invalid.
    """
    document = _read_json(path)
    if not isinstance(document, dict):
        raise InputError(message="Profile must be an object", source=str(path))

    try:
        if "services" in document:
            services = [ServiceProfile.model_validate(item) for item in document["services"]]
            return build_user_profile(services)
        return UserProfile.model_validate(document)
    except (ValidationError, TypeError) as exc:
        raise InputError(message=f"Invalid profile: {exc}", source=str(path)) from exc


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(
    festival: Festival | None,
    summary: FestivalMatchSummary,
    itinerary: Itinerary,
) -> str:
    """Format the plan as a human-readable text report."""
    lines: list[str] = []
    sep = "=" * 60

    lines.append(sep)
    lines.append("  Stageside — Festival Plan")
    lines.append(sep)
    if festival:
        where = ", ".join(part for part in (festival.venue, festival.city) if part)
        lines.append(f"{festival.name}" + (f"  ({where})" if where else ""))
    lines.append(
        f"Match: {summary.match_percentage}%  |  Must-see: {len(summary.must_see)}"
        f"  |  Discoveries: {len(summary.discoveries)}  |  Acts: {summary.total_count}"
    )
    lines.append("")

    for day in itinerary.days:
        header = day.day.upper() + (f" ({day.date.isoformat()})" if day.date else "")
        lines.append(header)
        lines.append("-" * 40)
        if not day.slots:
            lines.append("  Nothing scheduled.")
        for slot in day.chronological():
            performance = slot.performance
            tags = generate_vibe_tags(slot.match.match_type, performance.genres)
            lines.append(
                f"  {performance.start_time}-{performance.end_time}  "
                f"{performance.artist_name}  [{performance.stage or 'TBA'}]  "
                f"{format_match_score(slot.match.score)}%"
            )
            detail = slot.reason
            if tags:
                detail += f"  ({', '.join(tags)})"
            lines.append(f"      {detail}")
            if slot.alternatives:
                names = ", ".join(alt.artist_name for alt in slot.alternatives[:3])
                lines.append(f"      Also on: {names}")
        lines.append("")

    if itinerary.conflicts:
        lines.append("CONFLICTS")
        lines.append("-" * 40)
        for conflict in itinerary.conflicts:
            lines.append(
                f"  {conflict.day}: {conflict.first.artist_name} / {conflict.second.artist_name}"
                f" overlap {conflict.overlap_minutes} min"
            )
        lines.append("")

    if itinerary.highlights:
        lines.append("HIGHLIGHTS")
        lines.append("-" * 40)
        for highlight in itinerary.highlights:
            lines.append(f"  * {highlight}")
        lines.append("")

    lines.append(f"Coverage: {itinerary.coverage}%  |  Total score: {itinerary.total_score}")
    lines.append(sep)
    return "\n".join(lines)


def _format_json_output(
    festival: Festival | None,
    summary: FestivalMatchSummary,
    itinerary: Itinerary,
) -> str:
    """Serialize the plan to a JSON string."""
    output: dict = {
        "festival": festival.model_dump(mode="json") if festival else None,
        "summary": {
            "match_percentage": summary.match_percentage,
            "matched_count": summary.matched_count,
            "total_count": summary.total_count,
            "must_see": [entry.performance.artist_name for entry in summary.must_see],
            "discoveries": [entry.performance.artist_name for entry in summary.discoveries],
        },
        "itinerary": itinerary.model_dump(mode="json"),
    }
    return json.dumps(output, indent=2, ensure_ascii=False)


def _suppress_logs() -> None:
    """Send structlog and stdlib logging to stderr at WARNING+ level."""
    configure_logging(log_level="WARNING", stream=sys.stderr)


# ---------------------------------------------------------------------------
# Core run
# ---------------------------------------------------------------------------


def _run(args: argparse.Namespace, config: dict) -> int:
    """Load inputs, run the engine and write the results.

    ``config`` is the merged dict from :func:`load_config`; flags override
    its ``itinerary`` section.  Returns 0 on success.  Input and
    configuration problems propagate as :class:`StagesideError` to
    :func:`main`.
    """
    festival, performances = load_lineup(Path(args.lineup))
    profile = load_profile(Path(args.profile))

    if args.ics and festival is None:
        raise InputError(message="--ics needs a lineup with a 'festival' block", source=args.lineup)

    tables = load_matching_tables(config["matching_tables"]["path"])
    scorer = build_match_scorer(tables, max_top_artists=config["scoring"]["max_top_artists"])
    scored = scorer.score_lineup(performances, profile)
    summary = summarize_festival_match(scored)

    itinerary_config = config["itinerary"]
    try:
        defaults = ItineraryOptions(
            max_per_day=itinerary_config["max_per_day"],
            include_discoveries=itinerary_config["include_discoveries"],
            rest_break_minutes=itinerary_config["rest_break_minutes"],
        )
        options = ItineraryOptions(
            max_per_day=args.max_per_day if args.max_per_day is not None else defaults.max_per_day,
            include_discoveries=defaults.include_discoveries and not args.no_discoveries,
            rest_break_minutes=(
                args.rest_break if args.rest_break is not None else defaults.rest_break_minutes
            ),
        )
    except ValidationError as exc:
        raise ConfigurationError(message=f"Invalid itinerary options: {exc}") from exc
    itinerary = ItineraryGenerator(defaults).generate(scored, festival, options)

    if args.json_output:
        text = _format_json_output(festival, summary, itinerary)
    else:
        text = _format_text_output(festival, summary, itinerary)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Results written to: {args.output}", file=sys.stderr)
    else:
        print(text)

    if args.ics:
        # newline="" keeps the CRLF line endings iCalendar requires.
        with open(args.ics, "w", encoding="utf-8", newline="") as f:
            f.write(generate_ics(festival, itinerary))
        print(f"Calendar written to: {args.ics}", file=sys.stderr)

    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the plan CLI.

    Flags left unset fall back to the merged YAML and environment config.
    """
    parser = argparse.ArgumentParser(
        prog="python -m stageside.cli",
        description=(
            "Score a festival lineup against a listener profile and print a "
            "non-overlapping day-by-day itinerary."
        ),
    )
    parser.add_argument("lineup", type=str, help="Path to the lineup JSON file.")
    parser.add_argument("profile", type=str, help="Path to the listener profile JSON file.")
    parser.add_argument(
        "--max-per-day",
        type=int,
        default=None,
        help="Maximum performances per day (default: config itinerary.max_per_day or 8).",
    )
    parser.add_argument(
        "--no-discoveries",
        action="store_true",
        help="Leave discovery-only acts out of the itinerary.",
    )
    parser.add_argument(
        "--rest-break",
        type=int,
        default=None,
        help="Preferred minutes between consecutive sets (tie-break only).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text.",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write results to a file instead of stdout.",
    )
    parser.add_argument(
        "--ics",
        type=str,
        default=None,
        help="Also write the itinerary as an iCalendar (.ics) file.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/config.yaml",
        help="YAML config file; environment settings override it (default: config/config.yaml).",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress log output (useful with --json for clean stdout).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the plan tool.

    Exits with code 0 on success or 1 on any input or configuration error.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = load_config(args.config, settings=Settings())
    except StagesideError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    # JSON mode implies quiet; log lines must never mix into JSON output.
    if args.quiet or args.json_output:
        _suppress_logs()
    else:
        configure_logging(log_level=config["logging"]["level"], stream=sys.stderr)

    try:
        exit_code = _run(args, config)
    except StagesideError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
