"""
Shelf packer for laying photo prints out on fixed-size sheets.

Photos are expanded into one entry per physical copy (all copies of the
first item, then all copies of the second, ...) and placed left to
right, top to bottom, with ``padding`` between photos and around the
sheet edge. When a photo does not fit on the current row the cursor
wraps to a new row below the tallest photo of the row; when it does not
fit below either, the sheet is closed and a new one started.

This is a single greedy pass: no rotation, no reordering, no
backtracking. The exact order it produces is the contract, not any
optimality property.

Nothing here raises on bad input. Invalid items, zero-copy items and
photos larger than the sheet's printable area are left out of the
layout (oversized photos are still billed by the pricing engine).
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from logging_config import get_logger
from models.layout import GridEstimate, PageBin, PageSize, Placement
from models.print_item import PrintItem, is_positive_finite, parse_copies, parse_dimension


logger = get_logger(__name__)

PageSizeLike = Union[PageSize, Tuple[float, float], Mapping[str, Any]]


def as_page_size(page_size: PageSizeLike) -> Optional[PageSize]:
    """
    Accept a PageSize, a ``(width, height)`` pair or a ``{width, height}`` mapping.

    Returns None when the dimensions are missing, not numbers, or not
    positive and finite.
    """
    if isinstance(page_size, PageSize):
        width, height = page_size.width, page_size.height
    elif isinstance(page_size, Mapping):
        width, height = page_size.get("width"), page_size.get("height")
    elif isinstance(page_size, (tuple, list)) and len(page_size) == 2:
        width, height = page_size
    else:
        return None

    width = parse_dimension(width)
    height = parse_dimension(height)
    if not (is_positive_finite(width) and is_positive_finite(height)):
        return None
    if isinstance(page_size, PageSize):
        return page_size
    return PageSize(width, height)


def as_padding(padding: Any) -> float:
    """Padding as a float; negative, non-finite or unparseable values become 0."""
    value = parse_dimension(padding)
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return value


def expand_copies(items: Iterable[PrintItem]) -> Iterator[PrintItem]:
    """Yield one entry per physical print, keeping item order then copy order."""
    for item in items:
        if not item.is_billable:
            continue
        for _ in range(item.copies):
            yield item


def fits_page(item: PrintItem, page_size: PageSize, padding: float) -> bool:
    """True when the item fits inside the sheet once edge padding is removed."""
    return (
        item.is_valid
        and item.width <= page_size.usable_width(padding)
        and item.height <= page_size.usable_height(padding)
    )


def oversized_items(
    items: Iterable[PrintItem], page_size: PageSizeLike, padding: float = 0.0
) -> List[PrintItem]:
    """Billable items that the packer will leave out because they are too large."""
    page = as_page_size(page_size)
    padding = as_padding(padding)
    return [
        item for item in items
        if item.is_billable and (page is None or not fits_page(item, page, padding))
    ]


def pack_layout(
    items: Sequence[PrintItem],
    page_size: PageSizeLike,
    padding: float = 0.0,
) -> List[PageBin]:
    """
    Lay items out on as many sheets as needed.

    Args:
        items: Print items in the order the customer added them
        page_size: Sheet dimensions, same unit as the items
        padding: Gap between photos and from the sheet edges

    Returns:
        Non-empty pages in order; an empty list when nothing fits
    """
    page = as_page_size(page_size)
    padding = as_padding(padding)
    if page is None:
        return []

    right_limit = page.width - padding
    bottom_limit = page.height - padding

    pages: List[PageBin] = []
    current: List[Placement] = []
    x = y = padding
    row_max_height = 0.0

    def close_page():
        nonlocal current, x, y, row_max_height
        if current:
            pages.append(PageBin(page.width, page.height, tuple(current)))
        current = []
        x = y = padding
        row_max_height = 0.0

    skipped = set()
    for entry in expand_copies(items):
        if not fits_page(entry, page, padding):
            if id(entry) not in skipped:
                skipped.add(id(entry))
                logger.debug(
                    f"Skipping {entry.width}x{entry.height} item: larger than "
                    f"printable area {page.usable_width(padding)}x{page.usable_height(padding)}"
                )
            continue

        if y + entry.height > bottom_limit:
            close_page()

        if x + entry.width > right_limit:
            x = padding
            y += row_max_height + padding
            row_max_height = 0.0
            if y + entry.height > bottom_limit:
                close_page()

        current.append(Placement(entry, x, y))
        x += entry.width + padding
        row_max_height = max(row_max_height, entry.height)

    close_page()

    logger.debug(
        f"Packed {sum(len(p) for p in pages)} prints onto {len(pages)} page(s)"
    )
    return pages


def grid_capacity(width: Any, height: Any, page_size: PageSizeLike) -> int:
    """Photos of one size that tile a sheet edge to edge, with no padding."""
    page = as_page_size(page_size)
    item = PrintItem(parse_dimension(width), parse_dimension(height))
    if page is None or not item.is_valid:
        return 0
    return math.floor(page.width / item.width) * math.floor(page.height / item.height)


def estimate_pages(
    width: Any,
    height: Any,
    copies: Any,
    page_size: PageSizeLike,
    page_label: str = "A4",
) -> GridEstimate:
    """
    Estimate sheets needed for ``copies`` photos of one size.

    Invalid sizes, counts or sheets give an empty estimate; a photo that
    cannot fit on a sheet at all gives an empty estimate with an error
    message.
    """
    item = PrintItem(parse_dimension(width), parse_dimension(height), parse_copies(copies))
    if not item.is_billable or as_page_size(page_size) is None:
        return GridEstimate()

    per_page = grid_capacity(item.width, item.height, page_size)
    if per_page == 0:
        return GridEstimate(
            error=f"Photo size is too large for an {page_label} sheet."
        )

    return GridEstimate(
        photos_per_page=per_page,
        pages_required=math.ceil(item.copies / per_page),
    )
