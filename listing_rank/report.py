"""Tabular views of a ranked batch for debugging."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
from loguru import logger

from .pipeline_types import ScoredItem

COLUMNS = ["price", "rating", "delivery_code", "url", "score"]


def ranked_frame(ranked: Sequence[ScoredItem]) -> pd.DataFrame:
    """One row per item in rank order; unbounded delivery shows as NaN."""
    rows = [
        {
            "price": item.price,
            "rating": item.rating,
            "delivery_code": np.nan if item.delivery_unbounded else item.delivery_code,
            "url": item.url,
            "score": item.score,
        }
        for item in ranked
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def log_ranked_table(ranked: Sequence[ScoredItem]) -> None:
    if not ranked:
        logger.debug("Ranked table: <empty>")
        return
    df = ranked_frame(ranked)
    with pd.option_context("display.max_colwidth", 80, "display.width", 200):
        logger.debug("Ranked table ({} items):\n{}", len(df), df.to_string())
