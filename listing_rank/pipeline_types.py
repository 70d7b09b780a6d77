"""Typed containers shared across pipeline modules."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

# int for a real month/day ordinal, math.inf when unbounded
DeliveryCode = Union[int, float]


@dataclass(frozen=True)
class RawListing:
    """One collected listing block: flattened text plus its link, both optional."""

    content: Optional[str]
    url: Optional[str]


@dataclass(frozen=True)
class StructuredItem:
    """Fully parsed listing; only built when every field was derived."""

    price: float
    rating: float
    delivery_code: DeliveryCode
    url: str

    @property
    def delivery_unbounded(self) -> bool:
        return math.isinf(self.delivery_code)

    def with_score(self, score: float) -> "ScoredItem":
        return ScoredItem(
            price=self.price,
            rating=self.rating,
            delivery_code=self.delivery_code,
            url=self.url,
            score=float(score),
        )


@dataclass(frozen=True)
class ScoredItem(StructuredItem):
    """StructuredItem plus its batch-relative composite score."""

    score: float = 0.0
