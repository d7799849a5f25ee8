from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Union

Number = Union[int, float, str, Decimal]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_money(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def round2(amount: Number) -> Decimal:
    """Round to the nearest cent, halves going up."""
    value = to_money(amount)
    with localcontext() as ctx:
        # room for every integer digit plus the two cents
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(amounts: Iterable[Number]) -> Decimal:
    return sum((to_money(a) for a in amounts), ZERO)


def clamp(amount: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(amount, high))


def percent_of(amount: Number, percent: Number) -> Decimal:
    return to_money(amount) * to_money(percent) / Decimal(100)


def whole_multiples(amount: Decimal, step: Decimal) -> Decimal:
    """How many whole `step`s fit into `amount`; `step` must be positive."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() - step.adjusted() + 2)
        return amount // step


def subtotal_of(items) -> Decimal:
    return round2(sum_money(item.line_total for item in items))
