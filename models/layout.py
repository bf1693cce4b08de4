"""
Layout data models.

Pages and placements produced by the layout packer. All coordinates are
in the same unit as the page and item dimensions (centimetres in this
application), measured from the page's top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .print_item import PrintItem


@dataclass(frozen=True)
class PageSize:
    """Fixed dimensions of one output sheet."""

    width: float
    height: float

    def usable_width(self, padding: float) -> float:
        return self.width - 2 * padding

    def usable_height(self, padding: float) -> float:
        return self.height - 2 * padding

    def to_dict(self) -> Dict[str, float]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Placement:
    """
    One physical copy of an item placed on a page.

    ``item`` is a back-reference to the caller's PrintItem; the
    placement does not own it.
    """

    item: PrintItem
    x: float
    y: float

    @property
    def right(self) -> float:
        return self.x + self.item.width

    @property
    def bottom(self) -> float:
        return self.y + self.item.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.item.width,
            "height": self.item.height,
            "label": self.item.label,
        }


@dataclass(frozen=True)
class PageBin:
    """
    One output page and the placements assigned to it, in packing order.

    Built once by the packer and immutable afterwards.
    """

    width: float
    height: float
    placements: Tuple[Placement, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.placements)

    @property
    def used_area(self) -> float:
        return sum(p.item.width * p.item.height for p in self.placements)

    @property
    def utilization(self) -> float:
        """Fraction of the page area covered by placed items."""
        page_area = self.width * self.height
        if page_area <= 0:
            return 0.0
        return self.used_area / page_area

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "utilization": round(self.utilization, 4),
            "placements": [p.to_dict() for p in self.placements],
        }


@dataclass(frozen=True)
class GridEstimate:
    """
    Quick uniform-grid estimate of how many sheets a photo order needs.

    Assumes every photo in the order has the same size and tiles the
    sheet edge to edge, so it is an upper bound on density that the
    padded shelf layout will not always reach.
    """

    photos_per_page: int = 0
    pages_required: int = 0
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "photos_per_page": self.photos_per_page,
            "pages_required": self.pages_required,
        }
        if self.error:
            data["error"] = self.error
        return data
