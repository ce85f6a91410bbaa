"""
Day / month query parameters.

Malformed values are never rejected: they fall back to "today" or "this
month" in the hotel's timezone.
"""

import logging
import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

from src.domain.errors import ValidationError
from src.domain.monthly_calendar import days_in_month

log = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Africa/Cairo"

_DAY_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_MONTH_RE = re.compile(r"^[0-9]{4}-[0-9]{2}$")


def today(tz: str = DEFAULT_TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz)).date()


def parse_day(value) -> str:
    """Return value as a YYYY-MM-DD day key or raise ValidationError."""
    text = str(value or "").strip()
    if not _DAY_RE.match(text):
        raise ValidationError(f"Invalid day: {text!r}")
    try:
        date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid day: {text!r}") from exc
    return text


def parse_month(value) -> str:
    """Return value as a YYYY-MM month key or raise ValidationError."""
    text = str(value or "").strip()
    if not _MONTH_RE.match(text):
        raise ValidationError(f"Invalid month: {text!r}")
    try:
        date.fromisoformat(text + "-01")
    except ValueError as exc:
        raise ValidationError(f"Invalid month: {text!r}") from exc
    return text


def resolve_day(value, tz: str = DEFAULT_TIMEZONE) -> str:
    try:
        return parse_day(value)
    except ValidationError as exc:
        if value:
            log.info("%s, using today", exc)
        return today(tz).isoformat()


def resolve_month(value, tz: str = DEFAULT_TIMEZONE) -> str:
    try:
        return parse_month(value)
    except ValidationError as exc:
        if value:
            log.info("%s, using current month", exc)
        return today(tz).isoformat()[:7]


def month_bounds(month: str) -> tuple[str, str]:
    """First and last day keys of a YYYY-MM month."""
    return f"{month}-01", f"{month}-{days_in_month(month):02d}"
