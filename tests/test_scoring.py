import math

import pytest

from listing_rank.config import UNBOUNDED_DELIVERY
from listing_rank.pipeline_types import ScoredItem, StructuredItem
from listing_rank.rank import rank_items
from listing_rank.scoring import batch_stats, component_scores, score_items


def _item(price, rating, delivery, url):
    return StructuredItem(price=price, rating=rating, delivery_code=delivery, url=url)


def test_two_item_scenario_components_and_order():
    a = _item(10.0, 4.5, 515, "https://x/a")
    b = _item(20.0, 5.0, 202, "https://x/b")

    stats = batch_stats([a, b])
    assert stats.min_price == 10.0
    assert stats.min_delivery == 202

    comps = component_scores([a, b], stats)
    assert comps[0].tolist() == pytest.approx([0.0, 0.9, (202 - 515) / 202])
    assert comps[1].tolist() == pytest.approx([-1.0, 1.0, 0.0])

    scored = score_items([a, b])
    expected_a = (0.0 + 0.9 + (202 - 515) / 202) / 3
    expected_b = (-1.0 + 1.0 + 0.0) / 3
    assert scored[0].score == pytest.approx(expected_a)
    assert scored[1].score == pytest.approx(expected_b)

    ranked = rank_items(scored)
    assert (ranked[0].url == b.url) == (expected_b > expected_a)
    assert ranked[0].url == b.url


def test_score_items_returns_new_records():
    a = _item(10.0, 4.5, 515, "https://x/a")
    scored = score_items([a])
    assert isinstance(scored[0], ScoredItem)
    assert not hasattr(a, "score")
    # single item: cheapest and fastest, only rating counts
    assert scored[0].score == pytest.approx(0.9 / 3)


def test_empty_batch_scores_nothing():
    assert score_items([]) == []
    with pytest.raises(ValueError):
        batch_stats([])


def test_all_unbounded_delivery_zeroes_delivery_component():
    items = [
        _item(10.0, 4.0, UNBOUNDED_DELIVERY, "https://x/a"),
        _item(12.0, 5.0, UNBOUNDED_DELIVERY, "https://x/b"),
    ]
    scored = score_items(items)
    assert all(math.isfinite(i.score) for i in scored)
    assert scored[0].score == pytest.approx((0.0 + 0.8 + 0.0) / 3)
    assert scored[1].score == pytest.approx((-0.2 + 1.0 + 0.0) / 3)


def test_single_unbounded_delivery_is_worst():
    items = [
        _item(5.0, 5.0, UNBOUNDED_DELIVERY, "https://x/jan"),
        _item(50.0, 1.0, 1130, "https://x/slow"),
    ]
    scored = score_items(items)
    assert scored[0].score == -math.inf
    assert not any(math.isnan(i.score) for i in scored)
    assert rank_items(scored)[-1].url == "https://x/jan"
