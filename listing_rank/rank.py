# listing_rank/rank.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from loguru import logger

from .config import RankSettings
from .extract import extract_valid_items
from .pipeline_types import RawListing, ScoredItem
from .report import log_ranked_table
from .scoring import score_items

# Receives the full ranked list when debug is on
Reporter = Callable[[List[ScoredItem]], None]


@dataclass
class RankResult:
    best: Optional[ScoredItem]
    ranked: List[ScoredItem] = field(default_factory=list)


def rank_items(scored: Sequence[ScoredItem]) -> List[ScoredItem]:
    """
    Sort by score, highest first.

    Python's sort is stable with ``reverse=True`` as well, so equal scores
    keep their input order; there is no secondary key.
    """
    if not scored:
        return []
    return sorted(scored, key=lambda item: item.score, reverse=True)


def best_item(ranked: Sequence[ScoredItem]) -> Optional[ScoredItem]:
    return ranked[0] if ranked else None


def rank_listings(
    listings: Sequence[RawListing],
    settings: Optional[RankSettings] = None,
    reporter: Optional[Reporter] = None,
) -> RankResult:
    """
    Full pipeline: extract -> drop misses -> score -> rank.

    ``settings`` defaults to env-driven RankSettings; with ``debug`` on, the
    ranked list is handed to ``reporter`` (a logged table by default).
    """
    if settings is None:
        settings = RankSettings()

    items = extract_valid_items(listings, settings.origin)
    ranked = rank_items(score_items(items))

    if settings.debug:
        (reporter or log_ranked_table)(ranked)

    best = best_item(ranked)
    if best is None:
        logger.info("No listing yielded a complete match")
    else:
        logger.info("Best ranked: score={:.4f} url={}", best.score, best.url)
    return RankResult(best=best, ranked=ranked)
