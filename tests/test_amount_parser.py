"""Tests for amount parsing and formatting."""

from decimal import Decimal

import pytest

from fintrack.domain.errors import ValidationError
from fintrack.utils.amount_parser import format_amount, parse_amount, require_cents


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("-$123.45", Decimal("-123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("(123.45)", Decimal("-123.45")),
        ("  €5 ", Decimal("5")),
        (12, Decimal("12")),
        (0.1, Decimal("0.1")),
        (Decimal("7.25"), Decimal("7.25")),
    ],
)
def test_parse_amount(value, expected):
    """Test the accepted amount formats."""
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "abc", "1.2.3", "NaN", "inf", Decimal("Infinity"), None, [], False])
def test_parse_amount_rejects(value):
    """Test that invalid and non-finite values raise ValidationError."""
    with pytest.raises(ValidationError):
        parse_amount(value)


@pytest.mark.parametrize("value", [Decimal("12"), Decimal("12.5"), Decimal("-12.34"), Decimal("100.500")])
def test_require_cents(value):
    """Test that amounts a two-decimal column holds exactly pass through."""
    assert require_cents(value) == value


@pytest.mark.parametrize("value", [Decimal("100.005"), Decimal("0.001"), Decimal("-1.2345")])
def test_require_cents_rejects(value):
    """Test that sub-cent amounts raise ValidationError."""
    with pytest.raises(ValidationError, match="more than two decimal places"):
        require_cents(value)


def test_validation_error_is_value_error():
    """Test that callers catching ValueError still work."""
    with pytest.raises(ValueError):
        parse_amount("nope")


@pytest.mark.parametrize(
    "amount,symbol,expected",
    [
        (Decimal("0"), "", "0.00"),
        (Decimal("1234.5"), "$", "$1,234.50"),
        (Decimal("-1234.5"), "$", "-$1,234.50"),
        (Decimal("0.005"), "", "0.01"),
        (Decimal("-0.001"), "€", "€0.00"),
    ],
)
def test_format_amount(amount, symbol, expected):
    """Test formatting with symbol, separators and rounding."""
    assert format_amount(amount, symbol) == expected
