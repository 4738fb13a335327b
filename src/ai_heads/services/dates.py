from __future__ import annotations

from datetime import date, datetime
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


def local_today() -> date:
    return date.today()


def parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        text = str(value).strip()
    except ValueError:
        return None
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        LOGGER.debug("Unparseable date value: %r", value)
        return None


def is_overdue(value: Any, today: date | None = None) -> bool:
    """True when ``value`` falls strictly before ``today`` (local calendar day).

    Missing or unparseable dates are never overdue.
    """
    parsed = parse_date(value)
    if parsed is None:
        return False
    return parsed < (today or local_today())


def days_overdue(value: Any, today: date | None = None) -> int:
    parsed = parse_date(value)
    if parsed is None:
        return 0
    return max(0, ((today or local_today()) - parsed).days)


def format_short(value: Any) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return "—"
    return parsed.strftime("%b %d")
