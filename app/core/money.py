from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round to 2 decimal places, halves away from zero (2.675 -> 2.68).

    The value goes through its shortest repr so that e.g. 0.125 rounds the
    way it reads rather than the way it is stored in binary.
    """
    return float(Decimal(repr(float(value))).quantize(_CENTS, rounding=ROUND_HALF_UP))
