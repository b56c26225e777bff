"""Amount parsing and formatting utilities.

Amounts are stored as integers in minor currency units (cents).
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into integer minor units.

    Handles various formats:
    - "123.45"
    - "₱123.45" or "$123.45"
    - "1,234.56"
    - "123.455" (rounded half-up to 12346)

    Args:
        amount_str: Amount string

    Returns:
        Amount in minor units

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, commas and whitespace
    cleaned = re.sub(r"[$€£¥₱]", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(cents: int) -> str:
    """Format minor units for display, e.g. 150000 -> '1,500.00'."""
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(cents), 100)
    return f"{sign}{whole:,}.{fraction:02d}"
