"""Tiered pricing for photo and document print orders."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from models.print_item import PrintItem, parse_copies, parse_dimension
from models.pricing import DEFAULT_SCHEDULE, PricingSchedule


# =============================================================================
# PHOTO PRICING
# =============================================================================

def tier_price(area: float, schedule: PricingSchedule = DEFAULT_SCHEDULE) -> float:
    """Unit price of the smallest tier whose bound covers ``area``."""
    for tier in schedule.tiers:
        if area <= tier.max_area:
            return tier.price
    return schedule.default_price


def paper_addon(paper_type: str, schedule: PricingSchedule = DEFAULT_SCHEDULE) -> float:
    """Per-copy surcharge for a paper type; unknown types cost nothing extra."""
    return schedule.paper_addons.get(paper_type, 0)


def delivery_charge(delivery_speed: str, schedule: PricingSchedule = DEFAULT_SCHEDULE) -> float:
    """Flat per-order delivery fee; unknown speeds cost nothing."""
    return schedule.delivery_charges.get(delivery_speed, 0)


def unit_price(
    item: PrintItem, paper_type: str, schedule: PricingSchedule = DEFAULT_SCHEDULE
) -> float:
    """Price of a single copy of ``item``, 0 for invalid items."""
    if not item.is_valid:
        return 0
    return tier_price(item.area, schedule) + paper_addon(paper_type, schedule)


def item_cost(
    item: PrintItem, paper_type: str, schedule: PricingSchedule = DEFAULT_SCHEDULE
) -> float:
    """copies x (tier price + paper addon); 0 for invalid or zero-copy items."""
    if not item.is_billable:
        return 0
    return item.copies * unit_price(item, paper_type, schedule)


def order_subtotal(
    items: Iterable[PrintItem],
    paper_type: str,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    return sum(item_cost(item, paper_type, schedule) for item in items)


def order_total(
    items: Iterable[PrintItem],
    paper_type: str,
    delivery_speed: str,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    """
    Subtotal plus delivery.

    An order that costs nothing to print is not charged for delivery
    either, so an empty or entirely invalid order totals 0.
    """
    subtotal = order_subtotal(items, paper_type, schedule)
    if subtotal == 0:
        return 0
    return subtotal + delivery_charge(delivery_speed, schedule)


def compute_order_total(
    items: Iterable[PrintItem],
    paper_type: str,
    delivery_speed: str,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Total price of a photo order. Never raises on user input."""
    return order_total(items, paper_type, delivery_speed, schedule)


# =============================================================================
# DOCUMENT PRICING
# =============================================================================

def document_subtotal(
    bw_pages: Any,
    color_pages: Any,
    copies: Any = 1,
    total_pages: Optional[int] = None,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    """
    Printing cost of a document order before delivery.

    ``(bw x bw price + colour x colour price) x copies``. Page counts that
    cannot be parsed count as 0. Returns 0 when there are no pages, when
    the split asks for more pages than the uploaded documents contain, or
    when copies is zero or negative. A blank or unparseable copy count
    means one copy.
    """
    bw = parse_copies(bw_pages)
    color = parse_copies(color_pages)
    if total_pages is not None and bw + color > total_pages:
        return 0
    if bw + color == 0:
        return 0

    copy_count = 1 if parse_dimension(copies) is None else parse_copies(copies)
    if copy_count <= 0:
        return 0

    per_copy = bw * schedule.bw_price_per_page + color * schedule.color_price_per_page
    return per_copy * copy_count


def document_total(
    bw_pages: Any,
    color_pages: Any,
    copies: Any,
    delivery_speed: str,
    total_pages: Optional[int] = None,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    subtotal = document_subtotal(bw_pages, color_pages, copies, total_pages, schedule)
    if subtotal == 0:
        return 0
    return subtotal + delivery_charge(delivery_speed, schedule)


class PricingEngine:
    """Binds the pricing functions to one pricing schedule."""

    def __init__(self, schedule: PricingSchedule = DEFAULT_SCHEDULE) -> None:
        self.schedule = schedule

    def tier_price(self, area: float) -> float:
        return tier_price(area, self.schedule)

    def unit_price(self, item: PrintItem, paper_type: str) -> float:
        return unit_price(item, paper_type, self.schedule)

    def item_cost(self, item: PrintItem, paper_type: str) -> float:
        return item_cost(item, paper_type, self.schedule)

    def delivery_charge(self, delivery_speed: str) -> float:
        return delivery_charge(delivery_speed, self.schedule)

    def order_subtotal(self, items: Iterable[PrintItem], paper_type: str) -> float:
        return order_subtotal(items, paper_type, self.schedule)

    def order_total(
        self, items: Iterable[PrintItem], paper_type: str, delivery_speed: str
    ) -> float:
        return order_total(items, paper_type, delivery_speed, self.schedule)

    def document_subtotal(
        self,
        bw_pages: Any,
        color_pages: Any,
        copies: Any = 1,
        total_pages: Optional[int] = None,
    ) -> float:
        return document_subtotal(bw_pages, color_pages, copies, total_pages, self.schedule)
