"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a plain amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return -amount if is_negative else amount


def parse_brl_amount(amount_str: str) -> Decimal:
    """Parse a Brazilian-formatted currency string into a Decimal.

    Handles various formats:
    - "1.234,56"
    - "R$ 1.234,56"
    - "-R$ 10,00"
    - "(10,00)" (negative in parentheses)
    - "150" (no decimal part)

    Args:
        amount_str: Amount string using "." for thousands and "," for decimals

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1].strip()
    if amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[1:]

    amount_str = re.sub(r"R\$", "", amount_str, flags=re.IGNORECASE)
    amount_str = amount_str.replace(" ", "").replace("\u00a0", "")
    amount_str = amount_str.replace(".", "").replace(",", ".")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return -amount if is_negative else amount


def format_brl(amount: Decimal, symbol: bool = True) -> str:
    """Format a Decimal for display as Brazilian currency.

    Example: Decimal("1234.5") -> "R$ 1.234,50"
    """
    quantized = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    # Build with US separators, then swap them
    text = f"{abs(quantized):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    if symbol:
        return f"{sign}R$ {text}"
    return f"{sign}{text}"
