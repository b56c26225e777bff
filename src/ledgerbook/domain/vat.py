"""VAT classification and computation."""

from enum import Enum


VAT_RATE_PERCENT = 12


class VatType(str, Enum):
    """VAT treatment of an entry."""

    VAT_EXEMPT = "vat_exempt"
    ZERO_RATED = "zero_rated"
    VAT_INCLUSIVE = "vat_inclusive"
    VAT_EXCLUSIVE = "vat_exclusive"


def _divide_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def compute_vat_amount(amount: int, vat_type: VatType) -> int:
    """Compute the VAT portion of an amount in minor units.

    Inclusive amounts already contain VAT (``amount * 12 / 112``); exclusive
    amounts get VAT added on top (``amount * 12 / 100``). Results are rounded
    half-up to the nearest minor unit.
    """
    if vat_type == VatType.VAT_INCLUSIVE:
        return _divide_half_up(amount * VAT_RATE_PERCENT, 100 + VAT_RATE_PERCENT)
    if vat_type == VatType.VAT_EXCLUSIVE:
        return _divide_half_up(amount * VAT_RATE_PERCENT, 100)
    return 0
