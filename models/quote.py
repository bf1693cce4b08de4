"""
Quote data models.

A quote is what the customer sees before paying: line costs, subtotal,
delivery fee and grand total, plus (for photos) the sheet layout.

Amounts are kept at full precision on the objects and rounded to two
decimals only when serialized in to_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .layout import PageBin
from .print_item import PrintItem


def _money(value: float) -> float:
    return round(value, 2)


@dataclass(frozen=True)
class QuoteLine:
    """Priced line for one print item."""

    item: PrintItem
    unit_price: float
    """Tier price plus paper addon, per copy."""

    cost: float
    """unit_price x copies."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.item.to_dict(),
            "unit_price": _money(self.unit_price),
            "cost": _money(self.cost),
        }


@dataclass
class PhotoQuote:
    """
    Priced and laid-out photo order.

    ``skipped_items`` lists items that are billed but could not be laid
    out because they do not fit inside the sheet's printable area.
    """

    paper_type: str
    delivery_speed: str
    lines: List[QuoteLine] = field(default_factory=list)
    subtotal: float = 0.0
    delivery_charge: float = 0.0
    total: float = 0.0
    pages: List[PageBin] = field(default_factory=list)
    skipped_items: List[PrintItem] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(len(page) for page in self.pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def copies(self) -> int:
        return sum(line.item.copies for line in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paper_type": self.paper_type,
            "delivery_speed": self.delivery_speed,
            "lines": [line.to_dict() for line in self.lines],
            "subtotal": _money(self.subtotal),
            "delivery_charge": _money(self.delivery_charge),
            "total": _money(self.total),
            "page_count": self.page_count,
            "placed_count": self.placed_count,
            "pages": [page.to_dict() for page in self.pages],
            "skipped_items": [item.to_dict() for item in self.skipped_items],
        }


@dataclass
class DocumentQuote:
    """Priced document print order (black & white and colour pages)."""

    bw_pages: int
    color_pages: int
    copies: int
    delivery_speed: str
    bw_cost: float = 0.0
    color_cost: float = 0.0
    printing_subtotal: float = 0.0
    delivery_charge: float = 0.0
    total: float = 0.0
    error: str = ""

    @property
    def per_copy_subtotal(self) -> float:
        return self.bw_cost + self.color_cost

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "bw_pages": self.bw_pages,
            "color_pages": self.color_pages,
            "copies": self.copies,
            "delivery_speed": self.delivery_speed,
            "bw_cost": _money(self.bw_cost),
            "color_cost": _money(self.color_cost),
            "per_copy_subtotal": _money(self.per_copy_subtotal),
            "printing_subtotal": _money(self.printing_subtotal),
            "delivery_charge": _money(self.delivery_charge),
            "total": _money(self.total),
        }
        if self.error:
            data["error"] = self.error
        return data
