"""Publish date parsing for scraped articles.

Strategies, first match wins:

1. ISO 8601 (``2024-03-15``, ``2024-03-15T10:00:00Z``)
2. Anything else dateutil understands, day first (``Fri, 15 Mar 2024 10:00:00 GMT``,
   ``March 15, 2024``, ``15.03.2024``)
3. Numeric ``dd.mm.yyyy`` embedded in other text
4. Ukrainian long form ``15 березня 2024`` (genitive month names)
"""

import logging
import re
from datetime import datetime
from typing import Optional

from dateutil.parser import isoparse, parse

logger = logging.getLogger(__name__)

_DOTTED_DATE = re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})")
_DAY = re.compile(r"(\d{1,2})")
_YEAR = re.compile(r"(\d{4})")

UKRAINIAN_MONTHS: dict[str, int] = {
    "січня": 1,
    "лютого": 2,
    "березня": 3,
    "квітня": 4,
    "травня": 5,
    "червня": 6,
    "липня": 7,
    "серпня": 8,
    "вересня": 9,
    "жовтня": 10,
    "листопада": 11,
    "грудня": 12,
}


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        return isoparse(value)
    except (ValueError, OverflowError):
        return None


def _parse_general(value: str) -> Optional[datetime]:
    try:
        return parse(value, dayfirst=True)
    except (ValueError, OverflowError):
        return None


def _parse_dotted(value: str) -> Optional[datetime]:
    match = _DOTTED_DATE.search(value)
    if not match:
        return None
    day, month, year = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def _parse_ukrainian(value: str) -> Optional[datetime]:
    lowered = value.lower()
    for name, month in UKRAINIAN_MONTHS.items():
        if name not in lowered:
            continue
        day_match = _DAY.search(value)
        year_match = _YEAR.search(value)
        if not (day_match and year_match):
            continue
        try:
            return datetime(int(year_match.group(1)), month, int(day_match.group(1)))
        except ValueError:
            return None
    return None


def parse_published_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a scraped date string; ``None`` when no strategy recognises it."""
    if not value:
        return None
    value = value.strip()

    for strategy in (_parse_iso, _parse_general, _parse_dotted, _parse_ukrainian):
        parsed = strategy(value)
        if parsed is not None:
            return parsed

    logger.debug(f"Unrecognised publish date: {value!r}")
    return None
