"""Parsers for the text encodings used by the FyningTime schema.

FyningTime stored timestamps as ``"2023-05-15 09:30:00+0200"`` and durations
in Go's ``time.Duration`` notation (``"8h30m0s"``, breaks as ``"45m"``).
None of these functions raise: malformed text degrades to ``"00:00"``,
``""``, ``0.0`` or ``0`` and the fallback is logged at DEBUG level.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

FALLBACK_TIME = "00:00"

_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})")
_DURATION_RE = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+(?:\.\d+)?)s)?$")
_BREAK_RE = re.compile(r"^(\d+)m$")


def _split_timestamp(timestamp) -> list[str]:
    text = str(timestamp or "").strip()
    return re.split(r"[\sT]+", text, maxsplit=1)


def extract_time_from_timestamp(timestamp) -> str:
    """Return ``HH:MM`` from a combined date/time/offset string."""
    parts = _split_timestamp(timestamp)
    match = _TIME_RE.match(parts[1]) if len(parts) == 2 else None
    if match is None:
        logger.debug("No time segment in %r, using %s", timestamp, FALLBACK_TIME)
        return FALLBACK_TIME

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        logger.debug("Time out of range in %r, using %s", timestamp, FALLBACK_TIME)
        return FALLBACK_TIME
    return f"{hour:02d}:{minute:02d}"


def extract_date_from_timestamp(timestamp) -> str:
    """Return the leading ``YYYY-MM-DD`` segment, or ``""`` if there is none."""
    match = _DATE_RE.match(_split_timestamp(timestamp)[0])
    if match is None:
        logger.debug("No date segment in %r", timestamp)
        return ""
    return match.group(1)


def parse_time_to_hours(text) -> float:
    """Convert ``"<N>h<N>m<N>s"`` to fractional hours, e.g. ``"4h30m0s"`` -> 4.5."""
    value = str(text or "").strip()
    match = _DURATION_RE.match(value)
    if not value or match is None:
        logger.debug("Unparseable duration %r, using 0.0", text)
        return 0.0

    hours, minutes, seconds = match.groups()
    return int(hours or 0) + int(minutes or 0) / 60 + float(seconds or 0) / 3600


def parse_break_time_to_minutes(text) -> int:
    """Convert ``"<N>m"`` to whole minutes."""
    match = _BREAK_RE.match(str(text or "").strip())
    if match is None:
        logger.debug("Unparseable break %r, using 0", text)
        return 0
    return int(match.group(1))
