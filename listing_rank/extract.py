from __future__ import annotations

"""
Field extraction for collected listing blocks.

Each field has its own parser that takes the flattened card text and
returns ``None`` when its pattern does not match.  :func:`extract_item`
combines them; a listing becomes a :class:`StructuredItem` only when all
four fields (price, rating, delivery, url) were found, otherwise its slot
is ``None`` and callers filter it out.
"""

import re
from typing import List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from loguru import logger

from .config import MAX_RATING
from .normalize import delivery_code
from .pipeline_types import DeliveryCode, RawListing, StructuredItem

# Currency-prefixed number, optional thousands group, optional cents
PRICE_RE = re.compile(r"\$([1-9][0-9]?[0-9]?,)?[0-9]+(\.[0-9][0-9])?")
PRICE_CLEANUP_RE = re.compile(r"[$,]")

# "4.50 out of 5 stars"
RATING_RE = re.compile(r"([0-9]\.[0-9][0-9]?.?[0-9])\sout")
RATING_CLEANUP_RE = re.compile(r"[.]")

DELIVERY_RE = re.compile(
    r"(delivery\s(Tomorrow|Mon|Tue|Wed|Thr|Fri|Sat|Sun),\s"
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec).([0-9]?[0-9]))"
)


def parse_price(text: str | None) -> Optional[float]:
    """``"$1,299.99"`` -> 1299.99. Non-positive prices count as a miss."""
    if not text:
        return None
    m = PRICE_RE.search(text)
    if not m:
        return None
    price = float(PRICE_CLEANUP_RE.sub("", m.group(0)))
    return price if price > 0 else None


def parse_rating(text: str | None) -> Optional[float]:
    """
    Rating on the 0..5 scale.

    The matched number loses its decimal point and is cut to its first
    two digits, which are read back as tenths: "4.50" -> "45" -> 4.5.
    Anything past the first decimal digit is truncated, not rounded.
    Values above MAX_RATING (other scales, "9.50 out of 10") are a miss.
    """
    if not text:
        return None
    m = RATING_RE.search(text)
    if not m:
        return None
    digits = RATING_CLEANUP_RE.sub("", m.group(1) or "")[:2]
    try:
        rating = int(digits) / 10
    except ValueError:
        return None
    return rating if rating <= MAX_RATING else None


def parse_delivery(text: str | None) -> Optional[DeliveryCode]:
    if not text:
        return None
    m = DELIVERY_RE.search(text)
    if not m:
        return None
    return delivery_code(m.group(3), m.group(4))


def resolve_url(link: str | None, origin: str) -> Optional[str]:
    """Resolve a listing link against ``origin``; ``None`` if unusable."""
    if link is None or not str(link).strip():
        return None
    try:
        absolute = urljoin(origin, str(link).strip())
        parsed = urlparse(absolute)
    except ValueError as e:
        logger.debug("Unparsable listing link {!r}: {}", link, e)
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return absolute


def extract_item(listing: RawListing | None, origin: str) -> Optional[StructuredItem]:
    if listing is None or not listing.content:
        return None

    text = listing.content
    price = parse_price(text)
    rating = parse_rating(text)
    delivery = parse_delivery(text)
    url = resolve_url(listing.url, origin)

    if price is None or rating is None or delivery is None or url is None:
        missing = [
            name
            for name, val in (("price", price), ("rating", rating), ("delivery", delivery), ("url", url))
            if val is None
        ]
        logger.debug("Dropping listing, missing {}: {!r}", ", ".join(missing), text[:80])
        return None

    return StructuredItem(price=price, rating=rating, delivery_code=delivery, url=url)


def extract_items(listings: Sequence[RawListing | None], origin: str) -> List[Optional[StructuredItem]]:
    """One slot per listing, in input order; ``None`` marks a dropped listing."""
    if not listings:
        return []
    return [extract_item(listing, origin) for listing in listings]


def extract_valid_items(listings: Sequence[RawListing | None], origin: str) -> List[StructuredItem]:
    items = [item for item in extract_items(listings, origin) if item is not None]
    logger.info("Extracted {} of {} listings", len(items), len(listings or []))
    return items
