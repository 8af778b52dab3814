import pytest

from khakhra_dashboard.formatting import (
    format_currency,
    format_date,
    format_number,
    format_percentage,
    group_indian,
)


@pytest.mark.parametrize("digits,expected", [
    ("0", "0"),
    ("999", "999"),
    ("1000", "1,000"),
    ("123456", "1,23,456"),
    ("12345678", "1,23,45,678"),
])
def test_group_indian(digits, expected):
    assert group_indian(digits) == expected


def test_format_currency():
    assert format_currency(123456.789) == "₹1,23,456.79"
    assert format_currency(84) == "₹84.00"
    assert format_currency(-1500.5) == "-₹1,500.50"
    assert format_currency(-0.001) == "₹0.00"
    assert format_currency(10, "USD") == "$10.00"


def test_format_number():
    assert format_number(1234567.4) == "12,34,567"
    assert format_number(-2500) == "-2,500"


def test_format_date():
    assert format_date("2024-05-03T10:15:00+05:30") == "03 May 2024"
    assert format_date("2024-12-01") == "01 Dec 2024"
    assert format_date(None) == "—"
    assert format_date("") == "—"


def test_format_percentage():
    assert format_percentage(50) == "50.0%"
    assert format_percentage(33.333, decimals=2) == "33.33%"
