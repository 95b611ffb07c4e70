"""Exact decimal helpers.

All nitrogen quantities flow through :class:`decimal.Decimal`. Floats coming
from records or rasters are converted through their shortest ``repr`` so
``0.1`` becomes ``Decimal("0.1")`` rather than its binary expansion.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

PRECISION = 28

ZERO = Decimal(0)
ONE = Decimal(1)


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a record value to Decimal, treating None as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def clamp(value: Decimal, low: Decimal | int, high: Decimal | int) -> Decimal:
    """Clamp value into [low, high]."""
    low = to_decimal(low)
    high = to_decimal(high)
    if value < low:
        return low
    if value > high:
        return high
    return value


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def round_half_up(value: Decimal, places: int = 0) -> Decimal:
    """Round for presentation. Never used inside a calculation."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def decimal_context():
    """Context manager with the precision used by all calculators."""
    return localcontext(Context(prec=PRECISION))
