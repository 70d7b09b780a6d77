"""
Normalisation helpers shared by the collector and the extractor.

Public helpers:

* clean_card_text(text) -> str
    Flatten a listing block's text content into the single line the
    field patterns are matched against.

* month_index(abbr) -> int | None
    0-based month index for a three-letter month abbreviation.

* delivery_code(month_abbr, day, year) -> int | inf
    Collapse a delivery date into one comparable ordinal,
    ``month_index * 100 + day``.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional, Union

from loguru import logger

from .config import REFERENCE_YEAR, UNBOUNDED_DELIVERY
from .pipeline_types import DeliveryCode

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

MAX_DAY_OF_MONTH = 31

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")


def clean_card_text(text: str | None) -> str:
    """Drop line breaks (without inserting spaces) and trim."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _LINE_BREAK_RE.sub("", text).strip()


def month_index(abbr: str) -> Optional[int]:
    try:
        return MONTH_ABBREVIATIONS.index(abbr.strip()[:3].title())
    except (AttributeError, ValueError):
        return None


def delivery_code(
    month_abbr: str,
    day: Union[str, int],
    year: int = REFERENCE_YEAR,
) -> DeliveryCode:
    """Ordinal delivery code for a month abbreviation and day of month.

    January and a zero day both come out as UNBOUNDED_DELIVERY: the
    month index and padded day are tested for truthiness, so a real
    January date collapses to "worst possible". Rankings depend on this,
    keep it.

    Days 1-31 roll over past the end of a short month ("Feb 30" is
    March 2); day 0 and days past 31 are not dates at all.
    """
    idx = month_index(month_abbr)
    if idx is None:
        logger.debug("Unknown delivery month {!r}", month_abbr)
        return UNBOUNDED_DELIVERY

    try:
        day_number = int(day)
    except (TypeError, ValueError):
        day_number = 0
    if not 1 <= day_number <= MAX_DAY_OF_MONTH:
        logger.debug("No such delivery date: {} {} {}", month_abbr, day, year)
        return UNBOUNDED_DELIVERY

    when = date(year, idx + 1, 1) + timedelta(days=day_number - 1)
    padded_day = f"{when.day:02d}"
    if not when.month - 1 or not int(padded_day):
        return UNBOUNDED_DELIVERY
    return (when.month - 1) * 100 + int(padded_day)
