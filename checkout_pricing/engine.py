from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from checkout_pricing.campaigns import Campaign
from checkout_pricing.models import ApplyContext, ApplyResult, CalcResult, CampaignKind, CartItem, DiscountLine
from checkout_pricing.money import round2, subtotal_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    campaign: Campaign
    result: ApplyResult

    @property
    def discount(self) -> Decimal:
        return self.result.discount


def pick_best(pool: Iterable[Campaign], ctx: ApplyContext) -> Optional[Selection]:
    """
    Evaluate every campaign of one pool against the same context and keep
    the one with the largest discount.

    Campaigns in a pool never see each other's effect. On a tie the first
    one wins. Returns None when nothing in the pool takes money off.
    """
    best: Optional[Selection] = None
    for campaign in pool:
        result = campaign.apply(ctx)
        logger.debug("  %s %s (%s): discount=%s", campaign.kind.value, campaign.id, campaign.label, result.discount)
        if result.discount > (best.discount if best else 0):
            best = Selection(campaign=campaign, result=result)
    return best


def partition(campaigns: Iterable[Campaign]) -> Dict[CampaignKind, List[Campaign]]:
    pools: Dict[CampaignKind, List[Campaign]] = {kind: [] for kind in CampaignKind.pipeline_order()}
    for campaign in campaigns:
        pools[campaign.kind].append(campaign)
    return pools


def calculate_final_price(items: Sequence[CartItem], campaigns: Sequence[Campaign]) -> CalcResult:
    """
    Price a cart: subtotal first, then the best coupon, the best on-top
    campaign and the best seasonal campaign, each against what the previous
    category left.
    """
    items = tuple(items)
    campaigns = tuple(campaigns)
    subtotal = subtotal_of(items)
    running = subtotal
    lines: List[DiscountLine] = []

    logger.info("PRICING START items=%d campaigns=%d subtotal=%s", len(items), len(campaigns), subtotal)

    pools = partition(campaigns)
    for kind in CampaignKind.pipeline_order():
        pool = pools[kind]
        if not pool:
            continue

        best = pick_best(pool, ApplyContext(items=items, running_total=running))
        if best is None or best.discount <= 0:
            logger.info("%s: no winner among %d campaign(s), total stays %s", kind.value, len(pool), running)
            continue

        running = best.result.new_total
        lines.append(best.result.line)
        logger.info("%s: %s wins discount=%s total=%s", kind.value, best.campaign.id, best.discount, running)

    final_total = round2(running)
    logger.info("PRICING END subtotal=%s discount=%s final=%s", subtotal, subtotal - final_total, final_total)
    return CalcResult(subtotal=subtotal, final_total=final_total, lines=tuple(lines))
