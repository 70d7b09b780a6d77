from __future__ import annotations
"""
Mapping utilities to convert ranked pipeline items into API responses.

Keeps the JSON-unsafe values (unbounded delivery, -inf scores) out of the
Pydantic schemas: both are reported as null.
"""

import math
from typing import List, Optional

from loguru import logger

from .config import RankedItemOut, RankResponse
from .pipeline_types import ScoredItem
from .rank import RankResult


def _finite_or_none(value: float) -> Optional[float]:
    return float(value) if math.isfinite(value) else None


def to_api_item(item: ScoredItem) -> RankedItemOut:
    return RankedItemOut(
        price=item.price,
        rating=item.rating,
        delivery_code=None if item.delivery_unbounded else int(item.delivery_code),
        url=item.url,
        score=_finite_or_none(item.score),
    )


def map_result_to_response(result: RankResult) -> RankResponse:
    """
    Convert a RankResult into a RankResponse.
    ``best`` is rebuilt from the ranked list so both share one mapping.
    """
    ranked: List[RankedItemOut] = [to_api_item(item) for item in result.ranked]
    best = ranked[0] if ranked else None
    if result.best is not None and not ranked:
        logger.warning("RankResult has a best item but an empty ranking; mapping best alone")
        best = to_api_item(result.best)
    logger.info("Mapped {} ranked items into API schema", len(ranked))
    return RankResponse(best=best, ranked=ranked)
