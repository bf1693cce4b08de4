"""
Print item model.

A PrintItem is one photo the customer wants printed, at a physical size
in centimetres, some number of times. Items are built from live form
input, so the parsing helpers here accept anything and never raise:
values that cannot be understood simply make the item invalid (or its
copy count zero), and invalid items contribute nothing to layout or
price.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional


def parse_dimension(value: Any) -> Optional[float]:
    """
    Parse a width or height from user input.

    Returns:
        The value as a float, or None if it is not a number. Range checks
        are left to PrintItem.is_valid so the parsed value is preserved.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def parse_copies(value: Any) -> int:
    """
    Parse a copy count from user input.

    Fractional counts are truncated toward zero; negative, non-finite and
    unparseable counts become 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, str):
        text = value.strip()
        try:
            return max(int(text), 0)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return 0
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    return 0


def is_positive_finite(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class PrintItem:
    """
    One photo to print, ``copies`` times, at ``width`` x ``height`` cm.

    Frozen: the packer and pricer hold references to items (placements
    point back at them) and must never see them change.
    """

    width: float
    """Physical width in centimetres."""

    height: float
    """Physical height in centimetres."""

    copies: int = 1
    """Number of physical prints requested."""

    label: str = ""
    """Optional display name (shown on invoices)."""

    @property
    def is_valid(self) -> bool:
        """True when both dimensions are positive, finite numbers."""
        return is_positive_finite(self.width) and is_positive_finite(self.height)

    @property
    def area(self) -> float:
        """Area in square centimetres, 0.0 for invalid items."""
        if not self.is_valid:
            return 0.0
        return self.width * self.height

    @property
    def is_billable(self) -> bool:
        return self.is_valid and self.copies > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "copies": self.copies,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrintItem":
        """
        Create a PrintItem from loose user input.

        Accepts ``quantity`` as an alias for ``copies``. Never raises:
        unparseable dimensions are stored as NaN so the item reports
        itself invalid.
        """
        if not isinstance(data, dict):
            return cls(width=math.nan, height=math.nan, copies=0)

        width = parse_dimension(data.get("width"))
        height = parse_dimension(data.get("height"))
        raw_copies = data.get("copies", data.get("quantity"))

        label = data.get("label") or ""
        if not isinstance(label, str):
            label = str(label)

        return cls(
            width=math.nan if width is None else width,
            height=math.nan if height is None else height,
            copies=parse_copies(raw_copies),
            label=label,
        )
