"""Tests for date and amount parsing."""

from datetime import date
from decimal import Decimal

import pytest

from spendsense.utils.amount_parser import parse_amount
from spendsense.utils.date_parser import get_date_range, parse_date

TODAY = date(2024, 3, 15)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", TODAY),
        ("Yesterday", date(2024, 3, 14)),
        ("3 days ago", date(2024, 3, 12)),
        ("1 day ago", date(2024, 3, 14)),
        ("2024-01-15", date(2024, 1, 15)),
        ("15 Jan 2023", date(2023, 1, 15)),
        ("Feb 2", date(2024, 2, 2)),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_parse_date_invalid():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date", today=TODAY)


@pytest.mark.parametrize(
    "period, expected",
    [
        ("today", (TODAY, TODAY)),
        ("this-week", (date(2024, 3, 11), TODAY)),
        ("this-month", (date(2024, 3, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_unknown():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1250", Decimal("1250")),
        ("1,250.50", Decimal("1250.50")),
        ("₹1,250", Decimal("1250")),
        ("Rs. 1,20,200", Decimal("120200")),
        ("INR 3200", Decimal("3200")),
        ("450 rs", Decimal("450")),
        ("$12.34", Decimal("12.34")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12..5", "NaN"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)
