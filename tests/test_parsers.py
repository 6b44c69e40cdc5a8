import pytest

from finlit.planner.formatting import format_inr
from finlit.planner.parsers import coerce_amount, parse_amount


@pytest.mark.parametrize(
    "raw,expected",
    [
        (50000, 50000.0),
        (12.5, 12.5),
        ("50000", 50000.0),
        ("₹1,00,000", 100000.0),
        ("Rs. 12,500/-", 12500.0),
        ("INR 7,500", 7500.0),
        ("25k", 25000.0),
        ("4.5L", 450000.0),
        ("12 lakhs", 1200000.0),
        ("3 lacs", 300000.0),
        ("1 Cr", 10000000.0),
        ("2 crores", 20000000.0),
        ("-5000", -5000.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw", [None, "", "   ", "abc", "₹", True, "nan", "NaN", "inf", "-inf", "infinity", float("nan"), float("inf")]
)
def test_parse_amount_rejects(raw):
    assert parse_amount(raw) is None


def test_coerce_amount_leaves_unparseable_for_pydantic():
    assert coerce_amount("₹2,000") == 2000.0
    assert coerce_amount("abc") == "abc"
    assert coerce_amount(5) == 5
    assert coerce_amount("nan") == "nan"


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (12500, "₹12,500"),
        (100000, "₹1,00,000"),
        (12345678, "₹1,23,45,678"),
        (1000.5, "₹1,000.5"),
        (-15000, "-₹15,000"),
        (None, "₹0"),
    ],
)
def test_format_inr(value, expected):
    assert format_inr(value) == expected
