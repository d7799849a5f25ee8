from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional, Sequence

from checkout_pricing.campaigns import (
    Campaign,
    fixed_amount_coupon,
    percent_coupon,
    percent_off_category,
    points_redeem,
    threshold_every_x_get_y,
)
from checkout_pricing.engine import calculate_final_price
from checkout_pricing.models import CalcResult, CartItem


def demo_cart() -> List[CartItem]:
    return [
        CartItem(sku="TS", name="T-Shirt", category="Clothing", unit_price=350, quantity=1),
        CartItem(sku="HAT", name="Hat", category="Accessories", unit_price=250, quantity=1),
    ]


def demo_campaigns() -> List[Campaign]:
    return [
        percent_coupon("c10", 10),
        points_redeem("p60", 60, 20),
        threshold_every_x_get_y("s300-40", 300, 40),
    ]


def load_cart(path: str) -> List[CartItem]:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of cart items")
    items = []
    for entry in raw:
        try:
            items.append(
                CartItem(
                    sku=entry["sku"],
                    name=entry.get("name", entry["sku"]),
                    category=entry["category"],
                    unit_price=entry["unit_price"],
                    quantity=entry.get("quantity", 1),
                )
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"{path}: bad cart item {entry!r}: {e}") from e
    return items


def campaigns_from_args(args: argparse.Namespace) -> List[Campaign]:
    campaigns: List[Campaign] = []
    for i, amount in enumerate(args.fixed_coupon, 1):
        campaigns.append(fixed_amount_coupon(f"fixed{i}", amount))
    for i, percent in enumerate(args.percent_coupon, 1):
        campaigns.append(percent_coupon(f"pct{i}", percent))
    for i, (category, percent) in enumerate(args.category_percent, 1):
        campaigns.append(percent_off_category(f"cat{i}", category, percent))
    for i, points in enumerate(args.points, 1):
        campaigns.append(points_redeem(f"pts{i}", points, args.points_cap))
    for i, (every_x, minus_y) in enumerate(args.every, 1):
        campaigns.append(threshold_every_x_get_y(f"season{i}", every_x, minus_y))
    return campaigns


def format_result(result: CalcResult) -> str:
    out = [f"Subtotal: {result.subtotal}"]
    for line in result.lines:
        out.append(f"  [{line.kind.value}] {line.label} ({line.id}): -{line.amount}")
    if not result.lines:
        out.append("  (no discounts)")
    out.append(f"Final total: {result.final_total}")
    return "\n".join(out)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Price one cart against a set of campaigns and print the breakdown.")
    p.add_argument("--cart", type=str, default=None, help="JSON file with a list of {sku, name, category, unit_price, quantity}")
    p.add_argument("--fixed-coupon", type=str, action="append", default=[], metavar="AMOUNT")
    p.add_argument("--percent-coupon", type=str, action="append", default=[], metavar="PERCENT")
    p.add_argument("--category-percent", nargs=2, action="append", default=[], metavar=("CATEGORY", "PERCENT"))
    p.add_argument("--points", type=str, action="append", default=[], metavar="POINTS")
    p.add_argument("--points-cap", type=str, default="20", metavar="PERCENT")
    p.add_argument("--every", nargs=2, action="append", default=[], metavar=("X", "Y"))
    p.add_argument("--verbose", action="store_true", help="Log every campaign evaluation")
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    try:
        items = load_cart(args.cart) if args.cart else demo_cart()
        campaigns = campaigns_from_args(args) or demo_campaigns()
    except (OSError, ValueError, ArithmeticError) as e:
        p.error(str(e))

    result = calculate_final_price(items, campaigns)

    print("\n=== RESULT ===")
    print(format_result(result))


if __name__ == "__main__":
    main()
