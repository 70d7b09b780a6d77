from __future__ import annotations

import math
import os
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


# ---------------------------
# Listing source
# ---------------------------

DEFAULT_ORIGIN = "https://www.amazon.com"

# Collector selectors for a saved search-results page
RESULT_SELECTOR = '[data-component-type="s-search-result"]'
CARD_SELECTOR = ".s-card-container"


# ---------------------------
# Delivery normalisation
# ---------------------------

# Listings in one batch are assumed to fall within this year
REFERENCE_YEAR = 2023

# Worst possible delivery; compares greater than any finite code
UNBOUNDED_DELIVERY = math.inf


# ---------------------------
# Scoring weights
# ---------------------------

MAX_RATING = 5.0

ONE_THIRD = 1 / 3
PRICE_WEIGHT = ONE_THIRD
RATING_WEIGHT = ONE_THIRD
DELIVERY_WEIGHT = ONE_THIRD


# ---------------------------
# Env toggles
# ---------------------------

def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


DEBUG = _env_flag("LISTING_RANK_DEBUG")
ORIGIN = os.getenv("LISTING_RANK_ORIGIN", DEFAULT_ORIGIN)


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class RankSettings(BaseModel):
    """
    Per-invocation configuration.

    ``origin`` resolves relative listing links; a bad origin is a setup
    error, so validation fails loudly instead of dropping every item.
    """

    debug: bool = DEBUG
    origin: str = Field(default=ORIGIN, validate_default=True)

    @field_validator("origin")
    @classmethod
    def origin_must_be_absolute(cls, value: str) -> str:
        value = (value or "").strip()
        try:
            parsed = urlparse(value)
        except ValueError as e:
            raise ValueError(f"Origin is not a parsable URL: {value!r}") from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Origin must be an absolute http(s) URL, got {value!r}")
        return value


class ListingIn(BaseModel):
    """
    One raw listing block as posted to /rank.
    """

    content: Optional[str] = None
    url: Optional[str] = None


class RankRequest(BaseModel):
    """
    Request body for POST /rank.
    """

    listings: List[ListingIn]
    debug: Optional[bool] = None
    origin: Optional[str] = None


class RankedItemOut(BaseModel):
    """
    Canonical schema for a single ranked listing.

    Unbounded delivery and non-finite scores are reported as null.
    """

    price: float = Field(gt=0)
    rating: float = Field(ge=0, le=MAX_RATING)
    delivery_code: Optional[int] = None
    url: str
    score: Optional[float] = None


class RankResponse(BaseModel):
    """
    Response body for POST /rank.
    """

    best: Optional[RankedItemOut] = None
    ranked: List[RankedItemOut]


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
