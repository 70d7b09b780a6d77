from __future__ import annotations

from pathlib import Path
from typing import List, Union

from bs4 import BeautifulSoup
from loguru import logger

from .config import CARD_SELECTOR, RESULT_SELECTOR
from .normalize import clean_card_text
from .pipeline_types import RawListing


def collect_listings(html: str) -> List[RawListing]:
    """
    Pull raw listing blocks out of a saved search-results page.

    Each search result contributes its first card container: the card's
    flattened text and the ``href`` of its first link (kept relative;
    the extractor resolves it).  Results without a card are skipped.
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "lxml")
    results = soup.select(RESULT_SELECTOR)

    listings: List[RawListing] = []
    for result in results:
        card = result.select_one(CARD_SELECTOR)
        if card is None:
            continue

        link = card.find("a")
        href = link.get("href") if link is not None else None

        listings.append(
            RawListing(
                content=clean_card_text(card.get_text()),
                url=href,
            )
        )

    logger.info("Collected {} listings from {} search results", len(listings), len(results))
    return listings


def collect_listings_from_file(path: Union[str, Path]) -> List[RawListing]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Page not found: {path}")
    logger.info("Reading saved page: {}", path)
    return collect_listings(path.read_text(encoding="utf-8", errors="replace"))
