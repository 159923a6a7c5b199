"""ICS calendar export for a festival plan.

Emits one VEVENT per performance that has timing and whose day label
resolves to a calendar date (see
:func:`stageside.utils.time_utils.resolve_day_date`).  Times are written
as floating local times: set times are published in the festival's local
wall-clock, and calendar apps show floating times as-is.
"""

from __future__ import annotations

import datetime
from collections.abc import Sequence

from stageside.models.lineup import Festival, Performance
from stageside.models.schedule import Itinerary, ItinerarySlot
from stageside.utils.logging import get_logger
from stageside.utils.time_utils import resolve_day_date

logger = get_logger(__name__)

PRODID = "-//Stageside//Festival Planner//EN"
UID_DOMAIN = "stageside.app"


def _escape(text: str) -> str:
    """Escape TEXT values per RFC 5545 section 3.3.11."""
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _format_local(moment: datetime.datetime) -> str:
    return moment.strftime("%Y%m%dT%H%M%S")


def _event_lines(festival: Festival, performance: Performance, reason: str) -> list[str] | None:
    if not performance.has_timing:
        return None
    day_date = resolve_day_date(performance.day, festival.start_date)
    if day_date is None:
        return None

    midnight = datetime.datetime.combine(day_date, datetime.time())
    start = midnight + datetime.timedelta(minutes=performance.start_minutes)
    end = midnight + datetime.timedelta(minutes=performance.end_minutes)
    location = performance.stage or festival.venue or festival.name
    description = f"{reason} - {festival.name}" if reason else festival.name

    return [
        "BEGIN:VEVENT",
        f"UID:{festival.id}-{performance.id}@{UID_DOMAIN}",
        f"DTSTART:{_format_local(start)}",
        f"DTEND:{_format_local(end)}",
        f"SUMMARY:{_escape(performance.artist_name)}",
        f"LOCATION:{_escape(location)}",
        f"DESCRIPTION:{_escape(description)}",
        "END:VEVENT",
    ]


def generate_ics(
    festival: Festival,
    selection: Itinerary | Sequence[ItinerarySlot | Performance],
) -> str:
    """Render a selection as an iCalendar document.

    Args:
        festival: The festival (dates, venue and name feed the events).
        selection: A generated itinerary, its slots, or plain performances
            from a user's agenda.

    Returns:
        The VCALENDAR text with CRLF line endings.
    """
    if isinstance(selection, Itinerary):
        items: Sequence[ItinerarySlot | Performance] = [
            slot for day in selection.days for slot in day.slots
        ]
    else:
        items = selection

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    skipped = 0
    for item in items:
        if isinstance(item, ItinerarySlot):
            event = _event_lines(festival, item.performance, item.reason)
        else:
            event = _event_lines(festival, item, "")
        if event is None:
            skipped += 1
            continue
        lines.extend(event)
    lines.append("END:VCALENDAR")

    logger.debug("ics_generated", festival=festival.id, events=len(items) - skipped, skipped=skipped)
    return "\r\n".join(lines) + "\r\n"
