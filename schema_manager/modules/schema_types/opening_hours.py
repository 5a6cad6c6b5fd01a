"""Opening-hours parser for compact ``Mo-Fr 08:30-17:00`` strings."""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

DAY_NAMES: dict[str, str] = {
    "Mo": "Monday",
    "Tu": "Tuesday",
    "We": "Wednesday",
    "Th": "Thursday",
    "Fr": "Friday",
    "Sa": "Saturday",
    "Su": "Sunday",
}
_DAY_ORDER = list(DAY_NAMES)

_ENTRY_RE = re.compile(
    r"^(?P<start>[A-Za-z]{2})(?:-(?P<end>[A-Za-z]{2}))?\s+"
    r"(?P<opens>\d{2}:\d{2})-(?P<closes>\d{2}:\d{2})$",
    re.ASCII,
)


def _day_index(code: str) -> int:
    """Position of a two-letter code in the week, or -1 if unknown."""
    key = code[:1].upper() + code[1:].lower()
    try:
        return _DAY_ORDER.index(key)
    except ValueError:
        return -1


def expand_days(start: str, end: str | None = None) -> list[str]:
    """Expand a day code or an inclusive forward range into full day names.

    Ranges never wrap across the week boundary: ``Sa-Mo`` yields nothing.

    Examples:
        >>> expand_days("Mo", "We")
        ['Monday', 'Tuesday', 'Wednesday']
        >>> expand_days("Sa", "Mo")
        []
    """
    start_idx = _day_index(start)
    end_idx = _day_index(end) if end else start_idx
    if start_idx < 0 or end_idx < 0:
        return []
    return [DAY_NAMES[code] for code in _DAY_ORDER[start_idx:end_idx + 1]]


def parse_opening_hours(hours: str) -> list[dict[str, Any]]:
    """Parse comma-separated opening-hours entries.

    Each entry reads ``<day>[-<day>] HH:MM-HH:MM``.  Entries that do not
    match, name an unknown day, or expand to no days are skipped.  Times are
    passed through unchanged.

    Returns:
        One ``OpeningHoursSpecification`` dict per usable entry.
    """
    specifications: list[dict[str, Any]] = []
    if not hours:
        return specifications

    for entry in (part.strip() for part in hours.split(",")):
        match = _ENTRY_RE.match(entry)
        if not match:
            if entry:
                logger.debug("Skipping malformed opening-hours entry: %r", entry)
            continue
        days = expand_days(match.group("start"), match.group("end"))
        if not days:
            logger.debug("Opening-hours entry yields no days: %r", entry)
            continue
        specifications.append({
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": days,
            "opens": match.group("opens"),
            "closes": match.group("closes"),
        })
    return specifications
