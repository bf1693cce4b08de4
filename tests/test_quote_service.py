"""
Unit tests for QuoteService.

The service only wires the packer and the pricing engine together, so
these tests focus on what it adds: request parsing, line building,
skipped-item reporting and the document page-count check.
"""

import pytest

from core.exceptions import InvalidPrintItemError, InvalidRequestError, UnknownOptionError
from models.layout import GridEstimate, PageSize
from models.print_item import PrintItem
from services.quote_service import QuoteService


@pytest.fixture
def service():
    """Service on an A4-like 20 x 28 cm sheet with 0.5 cm padding."""
    return QuoteService(page_size=PageSize(20, 28), padding=0.5, max_items=5)


class TestBuildItems:

    def test_lenient_parses_everything(self, service):
        items = service.build_items([
            {"width": "10", "height": "15", "copies": "2"},
            {"width": "abc", "height": 5},
        ])

        assert items[0] == PrintItem(10.0, 15.0, copies=2)
        assert not items[1].is_valid

    def test_lenient_non_list_is_empty(self, service):
        assert service.build_items({"width": 5}) == []
        assert service.build_items(None) == []

    def test_lenient_truncates_to_max_items(self, service):
        raw = [{"width": 5, "height": 5, "copies": 1}] * 8

        assert len(service.build_items(raw)) == 5

    def test_strict_raises(self, service):
        with pytest.raises(InvalidPrintItemError):
            service.build_items([{"width": -1, "height": 5}], strict=True)


class TestQuotePhotos:

    def test_single_item_order(self, service):
        quote = service.quote_photos(
            [{"width": 10, "height": 10, "copies": 2}], "matte", "standard"
        )

        assert quote.subtotal == 22
        assert quote.delivery_charge == 45
        assert quote.total == 67
        assert quote.copies == 2
        assert quote.page_count == 1
        assert quote.placed_count == 2
        assert [(line.unit_price, line.cost) for line in quote.lines] == [(11, 22)]

    def test_invalid_items_have_no_lines(self, service):
        quote = service.quote_photos(
            [{"width": -5, "height": 10, "copies": 2}, {"width": 5, "height": 5, "copies": 0}],
            "photo",
            "express",
        )

        assert quote.lines == []
        assert quote.total == 0
        assert quote.delivery_charge == 0
        assert quote.pages == []

    def test_oversized_item_billed_and_reported(self, service):
        quote = service.quote_photos(
            [{"width": 30, "height": 40, "copies": 1}, {"width": 5, "height": 5, "copies": 1}],
            "photo",
            "standard",
        )

        assert quote.subtotal == 20 + 8
        assert quote.placed_count == 1
        assert quote.skipped_items == [PrintItem(30.0, 40.0, copies=1)]

    def test_lenient_unknown_options_cost_nothing(self, service):
        quote = service.quote_photos(
            [{"width": 10, "height": 10, "copies": 1}], "papyrus", "drone"
        )

        assert quote.total == 10

    def test_strict_unknown_option_raises(self, service):
        with pytest.raises(UnknownOptionError):
            service.quote_photos(
                [{"width": 10, "height": 10, "copies": 1}], "papyrus", "standard", strict=True
            )

    def test_to_dict_rounds_money(self, service):
        data = service.quote_photos(
            [{"width": 10, "height": 10, "copies": 2}], "matte", "standard"
        ).to_dict()

        assert data["total"] == 67
        assert data["page_count"] == 1
        assert data["placed_count"] == 2
        assert data["pages"][0]["placements"][0]["x"] == 0.5
        assert data["skipped_items"] == []

    def test_layout_override(self, service):
        items = [PrintItem(5, 5, copies=2)]

        pages = service.layout(items, page_size=PageSize(6, 6), padding=0)

        assert len(pages) == 2


class TestEstimateGrid:

    def test_passport_photos(self, service):
        assert service.estimate_grid("3.5", "4.5", "45") == GridEstimate(30, 2)

    def test_unparseable_size(self, service):
        assert service.estimate_grid("", 4.5, 10) == GridEstimate()


class TestQuoteDocuments:

    def test_priced_document(self, service):
        quote = service.quote_documents(2, 3, 2, "express")

        assert quote.bw_cost == 6
        assert quote.color_cost == 15
        assert quote.per_copy_subtotal == 21
        assert quote.printing_subtotal == 42
        assert quote.delivery_charge == 100
        assert quote.total == 142
        assert quote.error == ""

    def test_split_exceeds_uploaded_pages(self, service):
        quote = service.quote_documents(4, 3, 1, "standard", total_pages=5)

        assert quote.total == 0
        assert quote.error == "Page count exceeds total pages."
        assert quote.to_dict()["error"] == "Page count exceeds total pages."

    def test_blank_copies_means_one(self, service):
        quote = service.quote_documents("1", "0", "", "standard")

        assert quote.copies == 1
        assert quote.total == 3 + 45

    def test_zero_copies_is_free(self, service):
        quote = service.quote_documents(5, 0, 0, "standard")

        assert quote.total == 0
        assert quote.delivery_charge == 0

    def test_strict_unknown_delivery(self, service):
        with pytest.raises(UnknownOptionError):
            service.quote_documents(1, 1, 1, "drone", strict=True)

    @pytest.mark.parametrize("bw,copies", [("abc", 1), (2, "2.5")])
    def test_strict_rejects_malformed_counts(self, service, bw, copies):
        with pytest.raises(InvalidRequestError):
            service.quote_documents(bw, 3, copies, "standard", strict=True)

    def test_lenient_coerces_malformed_counts(self, service):
        quote = service.quote_documents("abc", 3, "2.5", "standard")

        assert quote.bw_pages == 0
        assert quote.copies == 2
        assert quote.total == 3 * 5 * 2 + 45
