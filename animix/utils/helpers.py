"""Helper functions for animix."""

import html
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

NO_DESCRIPTION = "No description available."
UNKNOWN_TITLE = "Unknown"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_TAG_RE = re.compile(r"<[^>]+>")
_HOURS_RE = re.compile(r"(\d+)\s*hr")
_MINUTES_RE = re.compile(r"(\d+)\s*min")


def to_id(value: Any) -> Optional[str]:
    """Stringify a provider id; None stays None."""
    if value is None or value == "":
        return None
    return str(value)


def clamp(value: int, lo: int, hi: int) -> int:
    return min(max(int(value), lo), hi)


def strip_html(value: Optional[str]) -> str:
    """Remove markup and decode entities."""
    if not value:
        return ""
    text = value.replace("<br>", "\n").replace("<br/>", "\n").replace("<br />", "\n")
    return html.unescape(_TAG_RE.sub("", text)).strip()


def describe(value: Optional[str]) -> str:
    return strip_html(value) or NO_DESCRIPTION


def preferred_title(english: Optional[str], romaji: Optional[str], native: Optional[str]) -> str:
    """English, else romaji/original, else native, else "Unknown"."""
    return english or romaji or native or UNKNOWN_TITLE


def scale_score(value: Any, scale: int = 10) -> Optional[float]:
    """Rescale a provider score to 0-10.

    `scale` is the provider's maximum (100 for AniList averages, 10 for MAL).
    Non-numbers and values outside the provider scale map to None; a zero
    100-scale average means "no votes yet".
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value < 0 or value > scale:
        return None
    if scale == 100:
        return value / 10 if value else None
    return float(value)


def parse_duration(value: Optional[str]) -> Optional[int]:
    """'1 hr 30 min' / '24 min per ep' -> minutes."""
    if not value:
        return None
    hours = _HOURS_RE.search(value)
    minutes = _MINUTES_RE.search(value)
    if not hours and not minutes:
        return None
    return (int(hours.group(1)) * 60 if hours else 0) + (int(minutes.group(1)) if minutes else 0)


def normalize_weekday(value: Optional[str]) -> Optional[str]:
    """'Mondays' / 'monday' -> 'Monday'; unknown values pass through."""
    if not value:
        return None
    v = value.strip().rstrip("s").lower()
    for day in WEEKDAYS:
        if day.lower() == v:
            return day
    return value


def fuzzy_date(year: Optional[int], month: Optional[int] = None, day: Optional[int] = None) -> Optional[str]:
    """AniList fuzzy date -> ISO date; missing month/day default to 1."""
    if not year:
        return None
    try:
        return date(year, month or 1, day or 1).isoformat()
    except ValueError:
        return None


def iso_utc(ts: int) -> str:
    """Unix seconds -> ISO-8601 UTC timestamp."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat().replace("+00:00", "Z")
