"""Amount parsing and formatting utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

from fintrack.domain.errors import ValidationError

CENT = Decimal("0.01")


def parse_amount(value: str | int | float | Decimal) -> Decimal:
    """Parse an amount into a finite Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Ints, floats and Decimals are accepted as well. Floats go through their
    shortest string form so 0.1 becomes Decimal("0.1"), not the binary value.

    Args:
        value: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValidationError: If the value is not a number or is NaN/Infinity
    """
    if isinstance(value, bool):
        raise ValidationError(f"Could not parse amount {value!r}: not a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = _parse_amount_string(value)
    else:
        raise ValidationError(f"Could not parse amount {value!r}: not a number")

    if not amount.is_finite():
        raise ValidationError(f"Amount must be a finite number, got '{value}'")
    return amount


def _parse_amount_string(amount_str: str) -> Decimal:
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols, thousands separators and whitespace
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    # "-$5" loses its symbol above but keeps the sign
    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from e
    return -amount if is_negative else amount


def require_cents(amount: Decimal) -> Decimal:
    """Reject amounts that cannot be stored with two decimal places.

    Trailing zeros are fine ("1.500"); anything finer than a cent is not.

    Raises:
        ValidationError: If the amount has a non-zero digit past the cents
    """
    try:
        exact = amount == amount.quantize(CENT)
    except InvalidOperation as e:
        raise ValidationError(f"Amount {amount} is too large") from e
    if not exact:
        raise ValidationError(f"Amount {amount} has more than two decimal places")
    return amount


def format_amount(amount: Decimal, symbol: str = "") -> str:
    """Format an amount with thousands separators and two decimals.

    Examples:
        format_amount(Decimal("-1234.5"), "$") -> "-$1,234.50"
    """
    quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.2f}"
