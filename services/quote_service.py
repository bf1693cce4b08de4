"""
Quote Service - builds priced, laid-out quotes for print-delivery orders.

This is the single place where the layout packer and the pricing engine
meet. Both are pure, so the service holds no per-order state and one
instance is shared by every request thread.

RESPONSIBILITIES:
    - Turn raw request items into PrintItems (leniently, or strictly)
    - Price photo orders and lay them out on sheets
    - Price document orders from their B&W / colour page split
    - Report photos that are billed but too large to lay out

USAGE:
    service = QuoteService(page_size=PageSize(20, 28), padding=0.5)
    quote = service.quote_photos(raw_items, "matte", "standard")
    quote.total, quote.pages
"""

from __future__ import annotations

from typing import Any, List, Optional

from logging_config import get_logger
from models.layout import GridEstimate, PageBin, PageSize
from models.print_item import PrintItem, parse_copies, parse_dimension
from models.pricing import DEFAULT_SCHEDULE, PricingSchedule
from models.quote import DocumentQuote, PhotoQuote, QuoteLine
from modules.layout_packer import estimate_pages, oversized_items, pack_layout
from modules.pricing_engine import PricingEngine
from modules.validation import validate_document_order, validate_items, validate_options


logger = get_logger(__name__)


class QuoteService:
    """
    Stateless quoting over a fixed schedule, sheet size and padding.

    Thread Safety:
        All configuration is immutable and every call works on its own
        local data, so concurrent calls need no locking.
    """

    def __init__(
        self,
        schedule: PricingSchedule = DEFAULT_SCHEDULE,
        page_size: PageSize = PageSize(20, 28),
        padding: float = 0.5,
        page_label: str = "A4",
        max_items: Optional[int] = None,
    ) -> None:
        self.engine = PricingEngine(schedule)
        self.page_size = page_size
        self.padding = padding
        self.page_label = page_label
        self.max_items = max_items

    @property
    def schedule(self) -> PricingSchedule:
        return self.engine.schedule

    # =========================================================================
    # ITEMS
    # =========================================================================

    def build_items(self, raw_items: Any, strict: bool = False) -> List[PrintItem]:
        """
        Build PrintItems from request data.

        Lenient mode drops nothing and never raises: items that cannot be
        parsed come back invalid and cost nothing. Strict mode raises on
        the first bad item.
        """
        if strict:
            return validate_items(raw_items, self.max_items)
        if not isinstance(raw_items, list):
            return []
        if self.max_items is not None:
            raw_items = raw_items[: self.max_items]
        return [PrintItem.from_dict(raw) for raw in raw_items]

    # =========================================================================
    # PHOTOS
    # =========================================================================

    def layout(
        self,
        items: List[PrintItem],
        page_size: Optional[PageSize] = None,
        padding: Optional[float] = None,
    ) -> List[PageBin]:
        return pack_layout(
            items,
            page_size or self.page_size,
            self.padding if padding is None else padding,
        )

    def quote_photos(
        self,
        raw_items: Any,
        paper_type: str,
        delivery_speed: str,
        strict: bool = False,
    ) -> PhotoQuote:
        """
        Price and lay out a photo order.

        Args:
            raw_items: List of ``{width, height, copies, label?}`` dicts
            paper_type: Paper option (addon per copy)
            delivery_speed: Delivery option (flat fee)
            strict: Reject bad items and unknown options instead of
                pricing them at zero

        Raises:
            InvalidPrintItemError, UnknownOptionError, InvalidRequestError:
                in strict mode only
        """
        items = self.build_items(raw_items, strict=strict)
        if strict:
            validate_options(paper_type, delivery_speed, self.schedule)

        lines = [
            QuoteLine(
                item=item,
                unit_price=self.engine.unit_price(item, paper_type),
                cost=self.engine.item_cost(item, paper_type),
            )
            for item in items
            if item.is_billable
        ]

        subtotal = self.engine.order_subtotal(items, paper_type)
        total = self.engine.order_total(items, paper_type, delivery_speed)
        delivery = total - subtotal if total else 0

        quote = PhotoQuote(
            paper_type=paper_type,
            delivery_speed=delivery_speed,
            lines=lines,
            subtotal=subtotal,
            delivery_charge=delivery,
            total=total,
            pages=self.layout(items),
            skipped_items=oversized_items(items, self.page_size, self.padding),
        )

        logger.info(
            f"Photo quote: {len(lines)} line(s), {quote.copies} print(s), "
            f"{quote.page_count} page(s), total {quote.total:.2f}"
        )
        if quote.skipped_items:
            logger.info(
                f"{len(quote.skipped_items)} item(s) billed but too large to lay out"
            )
        return quote

    def estimate_grid(self, width: Any, height: Any, copies: Any) -> GridEstimate:
        """Uniform-grid sheet estimate for a single photo size."""
        return estimate_pages(width, height, copies, self.page_size, self.page_label)

    # =========================================================================
    # DOCUMENTS
    # =========================================================================

    def quote_documents(
        self,
        bw_pages: Any,
        color_pages: Any,
        copies: Any,
        delivery_speed: str,
        total_pages: Optional[int] = None,
        strict: bool = False,
    ) -> DocumentQuote:
        """
        Price a document order.

        When ``total_pages`` is given (pages actually uploaded) and the
        B&W + colour split asks for more, the quote is zero and carries
        an error message.

        Raises:
            UnknownOptionError: in strict mode, for an unknown delivery speed
            InvalidRequestError: in strict mode, for page counts or copies
                that are not whole numbers >= 0
        """
        if strict:
            validate_document_order(bw_pages, color_pages, copies)
            validate_options(None, delivery_speed, self.schedule)

        bw = parse_copies(bw_pages)
        color = parse_copies(color_pages)
        copy_count = 1 if parse_dimension(copies) is None else parse_copies(copies)

        quote = DocumentQuote(
            bw_pages=bw,
            color_pages=color,
            copies=copy_count,
            delivery_speed=delivery_speed,
        )

        if total_pages is not None and bw + color > total_pages:
            quote.error = "Page count exceeds total pages."
            logger.info(f"Document quote rejected: {bw + color} pages of {total_pages}")
            return quote

        printing = self.engine.document_subtotal(bw, color, copy_count, total_pages)
        if printing == 0:
            return quote

        quote.bw_cost = bw * self.schedule.bw_price_per_page
        quote.color_cost = color * self.schedule.color_price_per_page
        quote.printing_subtotal = printing
        quote.delivery_charge = self.engine.delivery_charge(delivery_speed)
        quote.total = printing + quote.delivery_charge

        logger.info(
            f"Document quote: {bw} B&W + {color} colour x {copy_count}, "
            f"total {quote.total:.2f}"
        )
        return quote
