"""
Data models for PrintDelivery.

This module contains dataclasses for:
- PrintItem: One photo to print at a physical size, N times
- PageSize / PageBin / Placement: Sheet layout produced by the packer
- PriceTier / PricingSchedule: Injectable price list
- PhotoQuote / DocumentQuote: Priced orders returned to the client

Items, layouts and schedules are frozen; the packer and pricing engine
only ever read them.
"""

from .print_item import PrintItem, parse_copies, parse_dimension
from .layout import GridEstimate, PageSize, PageBin, Placement
from .pricing import PriceTier, PricingSchedule, DEFAULT_SCHEDULE
from .quote import QuoteLine, PhotoQuote, DocumentQuote

__all__ = [
    # Item models
    "PrintItem",
    "parse_copies",
    "parse_dimension",
    # Layout models
    "GridEstimate",
    "PageSize",
    "PageBin",
    "Placement",
    # Pricing models
    "PriceTier",
    "PricingSchedule",
    "DEFAULT_SCHEDULE",
    # Quote models
    "QuoteLine",
    "PhotoQuote",
    "DocumentQuote",
]
