"""Decimal helpers shared by the calculator and the field synchronizer.

Every amount passes through ``to_decimal`` before any arithmetic, which makes
malformed input harmless: anything that is not a finite number becomes 0.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ZERO
        # repr() gives the shortest string that round-trips, so 0.075 stays 0.075
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
        return parsed if parsed.is_finite() else ZERO
    return ZERO


def to_number(value) -> float:
    number = float(to_decimal(value))
    # amounts past the float range come back as 0, like any other non-number
    return number if math.isfinite(number) else 0.0


def round2(value) -> Decimal:
    """Round to cents, halves away from zero."""
    amount = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the cents
        ctx.prec = max(400, amount.adjusted() + 3)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
