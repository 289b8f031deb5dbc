import pytest

from storepulse.reporting.formatters import fmt_amount, fmt_currency


@pytest.mark.parametrize("value,expected", [
    (20000, "20,000"),
    (20000.0, "20,000"),
    (1234.5, "1,234.50"),
    (600.0, "600"),
])
def test_fmt_amount(value, expected):
    assert fmt_amount(value) == expected


@pytest.mark.parametrize("value,expected", [
    (None, "-"),
    ("abc", "-"),
    (950, "$950"),
    (12500, "$12.5K"),
    (2_500_000, "$2.50M"),
])
def test_fmt_currency(value, expected):
    assert fmt_currency(value) == expected
