import math

from listing_rank.config import UNBOUNDED_DELIVERY
from listing_rank.normalize import clean_card_text, delivery_code, month_index


def test_clean_card_text_drops_line_breaks_and_trims():
    raw = "  Wireless Headphones\r\n$19.99\n4.50 out of 5 stars\r  "
    assert clean_card_text(raw) == "Wireless Headphones$19.994.50 out of 5 stars"
    assert clean_card_text(None) == ""


def test_month_index_is_zero_based():
    assert month_index("Jan") == 0
    assert month_index("Sep") == 8
    assert month_index("Dec") == 11
    assert month_index("Foo") is None


def test_delivery_code_month_times_hundred_plus_day():
    assert delivery_code("Jun", "15") == 515
    assert delivery_code("Dec", "5") == 1105
    assert delivery_code("Feb", 28) == 128


def test_january_delivery_is_unbounded_regardless_of_day():
    for day in ("1", "15", "31"):
        code = delivery_code("Jan", day)
        assert code == UNBOUNDED_DELIVERY
        assert math.isinf(code)


def test_short_month_days_roll_into_next_month():
    assert delivery_code("Feb", "29") == 201
    assert delivery_code("Feb", "30") == 202
    assert delivery_code("Apr", "31") == 401
    assert delivery_code("Dec", "31") == 1131


def test_days_outside_1_to_31_are_unbounded():
    assert delivery_code("Mar", "0") == UNBOUNDED_DELIVERY
    assert delivery_code("Mar", "00") == UNBOUNDED_DELIVERY
    assert delivery_code("Mar", "32") == UNBOUNDED_DELIVERY
    assert delivery_code("Jun", "99") == UNBOUNDED_DELIVERY


def test_unbounded_sorts_after_any_finite_code():
    codes = [delivery_code("Jan", "2"), delivery_code("Dec", "31"), delivery_code("Feb", "1")]
    assert sorted(codes) == [101, 1131, UNBOUNDED_DELIVERY]
