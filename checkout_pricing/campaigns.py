from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Optional

from checkout_pricing.models import ApplyContext, ApplyResult, CampaignKind, DiscountLine
from checkout_pricing.money import ZERO, Number, clamp, percent_of, round2, sum_money, to_money, whole_multiples

logger = logging.getLogger(__name__)

Rule = Callable[[ApplyContext], ApplyResult]


@dataclass(frozen=True, slots=True)
class Campaign:
    """
    A named discount rule.

    Every variant is this same shape: the constructors below differ only in
    the rule they close over. `kind` decides the pool the campaign competes
    in and when that pool is applied, never whether the rule fires.
    """

    id: str
    kind: CampaignKind
    label: str
    rule: Rule = field(repr=False, compare=False)

    def apply(self, ctx: ApplyContext) -> ApplyResult:
        return self.rule(ctx)


def _clamped(campaign_id: str, kind: CampaignKind, label: str, running_total: Decimal, discount: Decimal) -> ApplyResult:
    # amount is what actually comes off: never below zero, never more than is left
    amount = round2(clamp(discount, ZERO, running_total))
    if amount <= 0:
        return ApplyResult(new_total=running_total)
    return ApplyResult(
        new_total=round2(running_total - amount),
        line=DiscountLine(id=campaign_id, kind=kind, label=label, amount=amount),
    )


def _floored(campaign_id: str, kind: CampaignKind, label: str, running_total: Decimal, discount: Decimal) -> ApplyResult:
    # full discount goes on the line and into the comparison; only the new total stops at zero
    amount = round2(discount)
    if amount <= 0:
        return ApplyResult(new_total=running_total)
    return ApplyResult(
        new_total=round2(max(ZERO, running_total - amount)),
        line=DiscountLine(id=campaign_id, kind=kind, label=label, amount=amount),
    )


def fixed_amount_coupon(campaign_id: str, amount: Number, label: Optional[str] = None) -> Campaign:
    label = label if label is not None else f"Coupon {amount} off"
    off = to_money(amount)

    def rule(ctx: ApplyContext) -> ApplyResult:
        return _clamped(campaign_id, CampaignKind.COUPON, label, ctx.running_total, off)

    return Campaign(id=campaign_id, kind=CampaignKind.COUPON, label=label, rule=rule)


def percent_coupon(campaign_id: str, percent: Number, label: Optional[str] = None) -> Campaign:
    label = label if label is not None else f"Coupon {percent}% off"
    rate = to_money(percent)

    def rule(ctx: ApplyContext) -> ApplyResult:
        discount = round2(percent_of(ctx.running_total, rate))
        return _clamped(campaign_id, CampaignKind.COUPON, label, ctx.running_total, discount)

    return Campaign(id=campaign_id, kind=CampaignKind.COUPON, label=label, rule=rule)


def percent_off_category(campaign_id: str, category: str, percent: Number, label: Optional[str] = None) -> Campaign:
    """
    Percent off everything in one category.

    The base is the category's own subtotal from the cart, so earlier
    coupons do not shrink it; only the resulting total is bounded by what
    is left to pay.
    """
    label = label if label is not None else f"{percent}% off {category}"
    rate = to_money(percent)

    def rule(ctx: ApplyContext) -> ApplyResult:
        base = sum_money(item.line_total for item in ctx.items if item.category == category)
        discount = round2(percent_of(base, rate))
        return _floored(campaign_id, CampaignKind.ON_TOP, label, ctx.running_total, discount)

    return Campaign(id=campaign_id, kind=CampaignKind.ON_TOP, label=label, rule=rule)


def points_redeem(campaign_id: str, points: Number, cap_percent: Number = 20, label: Optional[str] = None) -> Campaign:
    """One point is worth one currency unit; at most `cap_percent` of the running total can be paid in points."""
    label = label if label is not None else f"Redeem {points} pts (cap {cap_percent}%)"
    available = to_money(points)
    cap_rate = to_money(cap_percent)

    def rule(ctx: ApplyContext) -> ApplyResult:
        cap = round2(percent_of(ctx.running_total, cap_rate))
        discount = round2(min(available, cap, ctx.running_total))
        return _clamped(campaign_id, CampaignKind.ON_TOP, label, ctx.running_total, discount)

    return Campaign(id=campaign_id, kind=CampaignKind.ON_TOP, label=label, rule=rule)


def threshold_every_x_get_y(campaign_id: str, every_x: Number, minus_y: Number, label: Optional[str] = None) -> Campaign:
    label = label if label is not None else f"Every {every_x} get {minus_y} off"
    step = to_money(every_x)
    off = to_money(minus_y)

    def rule(ctx: ApplyContext) -> ApplyResult:
        if step <= 0 or off <= 0:
            logger.debug("seasonal %s ignored: every_x=%s minus_y=%s", campaign_id, every_x, minus_y)
            return ApplyResult(new_total=ctx.running_total)
        buckets = whole_multiples(ctx.running_total, step)
        discount = round2(buckets * off)
        return _floored(campaign_id, CampaignKind.SEASONAL, label, ctx.running_total, discount)

    return Campaign(id=campaign_id, kind=CampaignKind.SEASONAL, label=label, rule=rule)
