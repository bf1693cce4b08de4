"""
Pricing schedule models.

The schedule is plain data injected into the pricing engine, so tests
and alternative price lists can swap it without touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class PriceTier:
    """Unit price for photos whose area is at most ``max_area`` (inclusive)."""

    max_area: float
    price: float


def _freeze(mapping: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class PricingSchedule:
    """
    Everything the pricing engine needs to know about prices.

    Tiers are kept sorted ascending by ``max_area`` regardless of the
    order they are passed in; the first tier whose bound covers an area
    wins, and ``default_price`` applies past the last bound.
    """

    tiers: Tuple[PriceTier, ...]
    default_price: float
    paper_addons: Mapping[str, float] = field(default_factory=dict, hash=False)
    delivery_charges: Mapping[str, float] = field(default_factory=dict, hash=False)
    bw_price_per_page: float = 0.0
    color_price_per_page: float = 0.0

    def __post_init__(self):
        ordered = tuple(sorted(self.tiers, key=lambda tier: tier.max_area))
        object.__setattr__(self, "tiers", ordered)
        object.__setattr__(self, "paper_addons", _freeze(self.paper_addons))
        object.__setattr__(self, "delivery_charges", _freeze(self.delivery_charges))

    @classmethod
    def from_tiers(
        cls,
        tiers: Iterable[Tuple[float, float]],
        default_price: float,
        **kwargs: Any,
    ) -> "PricingSchedule":
        """Build a schedule from ``(max_area, price)`` pairs."""
        return cls(
            tiers=tuple(PriceTier(max_area, price) for max_area, price in tiers),
            default_price=default_price,
            **kwargs,
        )

    @property
    def paper_types(self) -> Tuple[str, ...]:
        return tuple(self.paper_addons)

    @property
    def delivery_speeds(self) -> Tuple[str, ...]:
        return tuple(self.delivery_charges)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tiers": [{"max_area": t.max_area, "price": t.price} for t in self.tiers],
            "default_price": self.default_price,
            "paper_addons": dict(self.paper_addons),
            "delivery_charges": dict(self.delivery_charges),
            "bw_price_per_page": self.bw_price_per_page,
            "color_price_per_page": self.color_price_per_page,
        }


# Area bounds in cm^2, roughly: passport 3.5x4.5, 5x7, 10x15, 13x18, 20x25
DEFAULT_SCHEDULE = PricingSchedule.from_tiers(
    [(16, 5), (35, 8), (150, 10), (234, 12), (500, 15)],
    default_price=20,
    paper_addons={
        "photo": 0,
        "matte": 1,
        "glossy": 2,
        "premium": 3,
        "hd": 4,
    },
    delivery_charges={
        "standard": 45,
        "express": 100,
    },
    bw_price_per_page=3,
    color_price_per_page=5,
)
