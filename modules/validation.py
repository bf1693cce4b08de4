"""
Strict validation for order input.

The pricing engine and packer quietly ignore input they cannot use,
which suits a form being edited keystroke by keystroke. Callers that
submit a finished order (API clients, invoice generation) use these
helpers instead, so that a typo is reported rather than silently
priced at zero.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import InvalidPrintItemError, InvalidRequestError, UnknownOptionError
from models.print_item import PrintItem, is_positive_finite, parse_dimension
from models.pricing import DEFAULT_SCHEDULE, PricingSchedule
from modules.pricing_engine import compute_order_total


def _is_whole_non_negative(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    number = parse_dimension(value)
    if number is None or not math.isfinite(number):
        return False
    return number >= 0 and number == int(number)


def validate_item(raw: Any, index: Optional[int] = None) -> PrintItem:
    """
    Check one raw item and build the PrintItem for it.

    Raises:
        InvalidPrintItemError: if width/height are not positive numbers or
            copies is not a whole number >= 0
    """
    if isinstance(raw, PrintItem):
        raw = raw.to_dict()
    if not isinstance(raw, dict):
        raise InvalidPrintItemError("item", raw, index)

    for dimension in ("width", "height"):
        value = raw.get(dimension)
        if not is_positive_finite(parse_dimension(value)):
            raise InvalidPrintItemError(dimension, value, index)

    copies = raw.get("copies", raw.get("quantity", 1))
    if not _is_whole_non_negative(copies):
        raise InvalidPrintItemError("copies", copies, index)

    return PrintItem.from_dict({**raw, "copies": copies})


def validate_items(raw_items: Any, max_items: Optional[int] = None) -> List[PrintItem]:
    """Validate a list of raw items, returning PrintItems in the same order."""
    if not isinstance(raw_items, list):
        raise InvalidRequestError("'items' must be a list")
    if max_items is not None and len(raw_items) > max_items:
        raise InvalidRequestError(f"Too many items: {len(raw_items)} (maximum {max_items})")
    return [validate_item(raw, index) for index, raw in enumerate(raw_items)]


def validate_options(
    paper_type: Optional[str],
    delivery_speed: Optional[str],
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> None:
    """
    Raises:
        UnknownOptionError: for a paper type or delivery speed the schedule
            does not offer. ``None`` skips the corresponding check.
    """
    if paper_type is not None and paper_type not in schedule.paper_addons:
        raise UnknownOptionError("paper type", paper_type, schedule.paper_types)
    if delivery_speed is not None and delivery_speed not in schedule.delivery_charges:
        raise UnknownOptionError("delivery speed", delivery_speed, schedule.delivery_speeds)


def validate_document_order(bw_pages: Any, color_pages: Any, copies: Any) -> None:
    """
    Check the page split and copy count of a document order.

    Page counts may be omitted (0 pages of that kind) and copies may be
    omitted (1 copy); anything given must be a whole number >= 0.

    Raises:
        InvalidRequestError: naming the offending field
    """
    fields = (("bw_pages", bw_pages), ("color_pages", color_pages), ("copies", copies))
    for name, value in fields:
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        if not _is_whole_non_negative(value):
            raise InvalidRequestError(f"Invalid {name}: {value!r}", field=name)


def validate_address(address: Any, required: Iterable[str]) -> Dict[str, str]:
    """Return the address with every required field present and non-blank."""
    if not isinstance(address, dict):
        raise InvalidRequestError("'address' must be an object", missing=list(required))
    missing = [
        name for name in required
        if not isinstance(address.get(name), str) or not address[name].strip()
    ]
    if missing:
        raise InvalidRequestError("Delivery address is incomplete", missing=missing)
    return {name: address[name] for name in required}


def strict_compute_order_total(
    raw_items: Any,
    paper_type: str,
    delivery_speed: str,
    schedule: PricingSchedule = DEFAULT_SCHEDULE,
) -> float:
    """Validate everything first, then price with the regular engine."""
    items = validate_items(raw_items)
    validate_options(paper_type, delivery_speed, schedule)
    return compute_order_total(items, paper_type, delivery_speed, schedule)
