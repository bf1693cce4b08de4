"""
PDF invoice rendering for print-delivery orders.

One A4 page per invoice (more if a photo order has many lines): a
coloured header band with the brand name and invoice metadata, the
bill-to block, the line table, the totals block and a footer band.
"""

from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Dict, Optional, Union

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from models.quote import DocumentQuote, PhotoQuote


PRIMARY = Color(0.25, 0.55, 0.95)
GRAY = Color(0.3, 0.3, 0.3)
LIGHT_GRAY = Color(0.95, 0.95, 0.95)
WHITE = Color(1, 1, 1)
BLACK = Color(0, 0, 0)

FONT = "Helvetica"
BOLD = "Helvetica-Bold"

ADDRESS_FIELDS = ("name", "address", "pincode", "email", "mobile")

W, H = A4
LEFT = 50
QTY_X = 350
AMOUNT_X = 450
FOOTER_HEIGHT = 60
ROW_HEIGHT = 20


class InvoiceRenderer:
    """
    Draws invoices onto in-memory reportlab canvases.

    Holds branding only; each render() call draws on its own canvas, so
    one renderer can be shared by every request thread.
    """

    def __init__(
        self,
        brand_name: str = "DocuEase",
        footer_text: str = "",
        currency: str = "Rs.",
    ) -> None:
        self.brand_name = brand_name
        self.footer_text = footer_text
        self.currency = currency

    # ─── PUBLIC API ───

    def render(
        self,
        quote: Union[PhotoQuote, DocumentQuote],
        address: Dict[str, str],
        issued_on: Optional[date] = None,
    ) -> bytes:
        """Render ``quote`` billed to ``address``; returns the PDF bytes."""
        order_type = "Photo" if isinstance(quote, PhotoQuote) else "Document"
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=A4)
        c.setTitle(f"{self.brand_name} Invoice")
        c.setAuthor(self.brand_name)

        self._draw_header(c, order_type, issued_on or date.today())
        y = self._draw_bill_to(c, address, H - 140)
        y = self._draw_table_header(c, y - 50)

        if isinstance(quote, PhotoQuote):
            y = self._draw_photo_rows(c, quote, y)
            y = self._draw_photo_totals(c, quote, y - ROW_HEIGHT)
        else:
            y = self._draw_document_rows(c, quote, y)
            y = self._draw_document_totals(c, quote, y - ROW_HEIGHT)

        self._draw_footer(c)
        c.save()
        return buffer.getvalue()

    # ─── DRAWING PRIMITIVES ───

    def money(self, amount: float) -> str:
        return f"{self.currency} {amount:.2f}"

    @staticmethod
    def draw_text(c, text, x, y, font=FONT, size=10, color=BLACK):
        c.saveState()
        c.setFont(font, size)
        c.setFillColor(color)
        c.drawString(x, y, text)
        c.restoreState()

    @staticmethod
    def draw_rect(c, x, y, w, h, fill):
        c.saveState()
        c.setFillColor(fill)
        c.rect(x, y, w, h, fill=1, stroke=0)
        c.restoreState()

    def _row(self, c, description: str, qty: str, amount: str, y: float) -> float:
        y = self._ensure_room(c, y)
        self.draw_text(c, description, LEFT + 10, y)
        self.draw_text(c, qty, QTY_X, y)
        self.draw_text(c, amount, AMOUNT_X, y)
        return y - ROW_HEIGHT

    def _total_row(self, c, label: str, value: str, y: float, bold: bool = False) -> float:
        y = self._ensure_room(c, y)
        font, size = (BOLD, 12) if bold else (FONT, 10)
        self.draw_text(c, label, QTY_X, y, font=font, size=size)
        self.draw_text(c, value, AMOUNT_X, y, font=font, size=size)
        return y - ROW_HEIGHT

    def _ensure_room(self, c, y: float) -> float:
        if y > FOOTER_HEIGHT + 40:
            return y
        self._draw_footer(c)
        c.showPage()
        return H - 60

    # ─── SECTIONS ───

    def _draw_header(self, c, order_type: str, issued_on: date) -> None:
        self.draw_rect(c, 0, H - 100, W, 100, PRIMARY)
        self.draw_text(c, self.brand_name, LEFT, H - 68, font=BOLD, size=32, color=WHITE)

        y = H - 40
        self.draw_text(c, "INVOICE", AMOUNT_X, y, font=BOLD, size=20, color=WHITE)
        y -= 20
        self.draw_text(c, f"Order Type: {order_type} Printing", AMOUNT_X, y, size=8, color=WHITE)
        y -= 12
        self.draw_text(
            c, f"Date: {issued_on.strftime('%d/%m/%Y')}", AMOUNT_X, y, size=8, color=WHITE
        )

    def _draw_bill_to(self, c, address: Dict[str, str], y: float) -> float:
        self.draw_text(c, "BILL TO", LEFT, y, font=BOLD, size=12, color=PRIMARY)
        y -= 20
        for index, field in enumerate(ADDRESS_FIELDS):
            value = address.get(field, "")
            if index == 0:
                self.draw_text(c, value, LEFT, y, font=BOLD, size=11)
            else:
                self.draw_text(c, value, LEFT, y, color=GRAY)
            y -= 15
        return y + 15

    def _draw_table_header(self, c, y: float) -> float:
        self.draw_rect(c, LEFT, y - 10, W - 2 * LEFT, 25, LIGHT_GRAY)
        self.draw_text(c, "Item Description", LEFT + 10, y, font=BOLD, size=11, color=GRAY)
        self.draw_text(c, "Qty", QTY_X, y, font=BOLD, size=11, color=GRAY)
        self.draw_text(c, "Amount", AMOUNT_X, y, font=BOLD, size=11, color=GRAY)
        return y - 30

    def _draw_photo_rows(self, c, quote: PhotoQuote, y: float) -> float:
        for line in quote.lines:
            item = line.item
            description = f"Photos {item.width:g}x{item.height:g}cm ({quote.paper_type})"
            if item.label:
                description = f"{item.label}: {description}"
            y = self._row(c, description, str(item.copies), self.money(line.cost), y)
        return y

    def _draw_document_rows(self, c, quote: DocumentQuote, y: float) -> float:
        if quote.bw_pages > 0:
            per_page = quote.bw_cost / quote.bw_pages
            y = self._row(
                c,
                f"B&W Pages (at {self.money(per_page)}/page)",
                str(quote.bw_pages), self.money(quote.bw_cost), y,
            )
        if quote.color_pages > 0:
            per_page = quote.color_cost / quote.color_pages
            y = self._row(
                c,
                f"Color Pages (at {self.money(per_page)}/page)",
                str(quote.color_pages), self.money(quote.color_cost), y,
            )
        return y

    def _draw_photo_totals(self, c, quote: PhotoQuote, y: float) -> float:
        y = self._total_row(c, "Subtotal:", self.money(quote.subtotal), y)
        return self._draw_grand_total(c, quote.delivery_charge, quote.total, y)

    def _draw_document_totals(self, c, quote: DocumentQuote, y: float) -> float:
        y = self._total_row(c, "Subtotal:", self.money(quote.per_copy_subtotal), y)
        y = self._total_row(c, "Copies:", f"x {quote.copies}", y)
        return self._draw_grand_total(c, quote.delivery_charge, quote.total, y)

    def _draw_grand_total(self, c, delivery: float, total: float, y: float) -> float:
        y = self._total_row(c, "Delivery Fee:", self.money(delivery), y)
        c.saveState()
        c.setStrokeColor(GRAY)
        c.setLineWidth(1)
        c.line(QTY_X - 10, y, W - LEFT, y)
        c.restoreState()
        y -= ROW_HEIGHT
        return self._total_row(c, "Grand Total:", self.money(total), y, bold=True)

    def _draw_footer(self, c) -> None:
        self.draw_rect(c, 0, 0, W, FOOTER_HEIGHT, LIGHT_GRAY)
        self.draw_text(c, "Thank you for your business!", LEFT, 30, font=BOLD, size=12, color=GRAY)
        if self.footer_text:
            self.draw_text(c, self.footer_text, QTY_X, 30, size=9, color=GRAY)
