"""Money rounding shared by order computation.

Every monetary field passes through :func:`round2` before it is stored.
Order totals round at each aggregation step, not once at the end, so a
total can differ by a cent from a round-once ledger.  That difference is
the expected output.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert *value* to ``Decimal`` through its shortest string form.

    Going through ``str`` keeps ``1.005`` as ``1.005`` instead of the binary
    expansion ``1.00499999...`` so half-up rounding behaves on the decimal value.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a monetary value")
    return Decimal(str(value))


def round2(value: Any) -> Decimal:
    """Round to 2 decimal places, half away from zero."""
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Any]) -> Decimal:
    """Plain summation; callers round the result themselves."""
    return sum((to_decimal(v) for v in values), Decimal("0"))
