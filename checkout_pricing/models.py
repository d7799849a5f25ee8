from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from checkout_pricing.money import Number, ZERO, round2, sum_money, to_money


class CampaignKind(str, Enum):
    """
    Campaign category. Declaration order is the order in which the
    categories are applied to the running total.
    """

    COUPON = "coupon"
    ON_TOP = "onTop"
    SEASONAL = "seasonal"

    @classmethod
    def pipeline_order(cls) -> Tuple["CampaignKind", ...]:
        return tuple(cls)


@dataclass(frozen=True, slots=True)
class CartItem:
    sku: str
    name: str
    category: str
    unit_price: Number
    quantity: Number = 1

    def __post_init__(self) -> None:
        if to_money(self.unit_price) < 0:
            raise ValueError(f"unit_price must be >= 0 for {self.sku}: got {self.unit_price}")
        if to_money(self.quantity) < 0:
            raise ValueError(f"quantity must be >= 0 for {self.sku}: got {self.quantity}")

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price) * to_money(self.quantity)


@dataclass(frozen=True, slots=True)
class ApplyContext:
    """What a campaign sees: the whole cart and the total left after earlier categories."""

    items: Tuple[CartItem, ...]
    running_total: Decimal


@dataclass(frozen=True, slots=True)
class DiscountLine:
    id: str
    kind: CampaignKind
    label: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class ApplyResult:
    new_total: Decimal
    line: Optional[DiscountLine] = None

    @property
    def discount(self) -> Decimal:
        return self.line.amount if self.line else ZERO


@dataclass(frozen=True, slots=True)
class CalcResult:
    subtotal: Decimal
    final_total: Decimal
    lines: Tuple[DiscountLine, ...] = field(default_factory=tuple)

    @property
    def total_discount(self) -> Decimal:
        return round2(sum_money(line.amount for line in self.lines))

    def line_for(self, kind: CampaignKind) -> Optional[DiscountLine]:
        for line in self.lines:
            if line.kind == kind:
                return line
        return None
