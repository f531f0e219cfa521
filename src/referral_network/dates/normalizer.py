# src/referral_network/dates/normalizer.py

from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from referral_network.logging import get_logger

log = get_logger("dates")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Numeric timestamps above this are milliseconds (JavaScript Date.now()).
_MILLIS_THRESHOLD = 10 ** 11

# Tried in order after ISO-8601 parsing fails.
FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d %b %Y",
    "%b %d, %Y",
)


# ---------------------------------------------------------------------------
# Timezone helpers
# ---------------------------------------------------------------------------

def resolve_timezone(name: Optional[str]) -> tzinfo:
    """
    Map a configured timezone name to a tzinfo. Unknown names fall back to UTC.
    """
    if not name or str(name).upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(str(name))
    except (ZoneInfoNotFoundError, ValueError):
        log.warning("Unknown timezone %r; using UTC", name)
        return timezone.utc


def _aware(dt: datetime, tz: tzinfo) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _from_number(value: float, tz: tzinfo) -> Optional[datetime]:
    seconds = value / 1000.0 if abs(value) >= _MILLIS_THRESHOLD else value
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(tz)
    except (OverflowError, OSError, ValueError):
        return None


def _from_string(text: str, tz: tzinfo) -> Optional[datetime]:
    s = text.strip()
    if not s:
        return None

    # Bare digit strings are epoch values; short ones ("2024") are years.
    if s.isdigit() and len(s) >= 9:
        return _from_number(float(s), tz)

    iso = s[:-1] + "+00:00" if s.endswith(("Z", "z")) else s
    try:
        return _aware(datetime.fromisoformat(iso), tz)
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return _aware(datetime.strptime(s, fmt), tz)
        except ValueError:
            continue

    return None


def parse_join_date(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Parse a join timestamp into a timezone-aware datetime.

    Accepts:
        - datetime (naive values are pinned to ``tz``)
        - date (midnight in ``tz``)
        - int / float epoch seconds or milliseconds
        - ISO-8601 strings, including a trailing ``Z``
        - a handful of common day-first / month-name formats

    Anything else (including unparseable strings) returns None.
    """
    tz = tz or timezone.utc

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _aware(value, tz)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)

    if isinstance(value, (int, float)):
        return _from_number(float(value), tz)

    if isinstance(value, str):
        parsed = _from_string(value, tz)
        if parsed is None:
            log.debug("Unparseable join date %r", value)
        return parsed

    return None


def parse_day(value: Any) -> Optional[date]:
    """
    Parse a calendar day (``YYYY-MM-DD`` string, date or datetime).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return date.fromisoformat(s[:10])
        except ValueError:
            return None
    return None


# ---------------------------------------------------------------------------
# Day bounds
# ---------------------------------------------------------------------------

def day_start(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz or timezone.utc)


def day_end(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz or timezone.utc)


def local_day(dt: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of ``dt`` as seen in ``tz``."""
    return _aware(dt, tz or timezone.utc).astimezone(tz or timezone.utc).date()
