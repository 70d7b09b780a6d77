from __future__ import annotations

"""
Batch-relative weighted scoring.

Every listing is scored against the cheapest price and the fastest
delivery of its own batch, plus a fixed rating ceiling:

    price    = (min_price - price) / min_price          0 for the cheapest, < 0 otherwise
    rating   = rating / MAX_RATING                      0..1
    delivery = (min_delivery - code) / min_delivery     0 for the fastest, < 0 otherwise

    score = PRICE_WEIGHT * price + RATING_WEIGHT * rating + DELIVERY_WEIGHT * delivery

When a batch minimum is unbounded or not positive the matching component
is 0.0 for the whole batch.  A single unbounded delivery against a finite
minimum scores -inf on that component and ranks last.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from loguru import logger

from .config import DELIVERY_WEIGHT, MAX_RATING, PRICE_WEIGHT, RATING_WEIGHT
from .pipeline_types import ScoredItem, StructuredItem


@dataclass(frozen=True)
class BatchStats:
    min_price: float
    min_delivery: float
    max_rating: float = MAX_RATING


def batch_stats(items: Sequence[StructuredItem]) -> BatchStats:
    if not items:
        raise ValueError("batch_stats needs at least one item")
    return BatchStats(
        min_price=min(item.price for item in items),
        min_delivery=min(item.delivery_code for item in items),
    )


def _usable_base(base: float) -> bool:
    return bool(np.isfinite(base)) and base > 0


def relative_gap(base: float, values: np.ndarray) -> np.ndarray:
    """(base - v) / base per value, or zeros when ``base`` can't be divided by."""
    if not _usable_base(base):
        return np.zeros(values.shape, dtype="float64")
    # an inf value against a finite base gives -inf, never NaN
    return (base - values) / base


def component_scores(items: Sequence[StructuredItem], stats: BatchStats) -> np.ndarray:
    """Array of shape ``(n, 3)``: price, rating, delivery components per item."""
    prices = np.array([item.price for item in items], dtype="float64")
    ratings = np.array([item.rating for item in items], dtype="float64")
    deliveries = np.array([item.delivery_code for item in items], dtype="float64")

    if not _usable_base(stats.min_price):
        logger.warning("Degenerate min price {}; price component zeroed", stats.min_price)
    if not _usable_base(stats.min_delivery):
        logger.info("No bounded delivery in batch; delivery component zeroed")

    price = relative_gap(stats.min_price, prices)
    rating = ratings / stats.max_rating
    delivery = relative_gap(stats.min_delivery, deliveries)
    return np.column_stack([price, rating, delivery])


def score_items(items: Sequence[StructuredItem]) -> List[ScoredItem]:
    """
    Score a whole batch; returns new ScoredItems in input order.

    Already-scored items are rescored from their fields, so the same
    batch always yields the same scores.
    """
    if not items:
        return []

    stats = batch_stats(items)
    comps = component_scores(items, stats)
    scores = (
        PRICE_WEIGHT * comps[:, 0]
        + RATING_WEIGHT * comps[:, 1]
        + DELIVERY_WEIGHT * comps[:, 2]
    )

    logger.info(
        "Scored {} items (min_price={}, min_delivery={})",
        len(items), stats.min_price, stats.min_delivery,
    )
    return [item.with_score(float(s)) for item, s in zip(items, scores)]
