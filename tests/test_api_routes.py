"""
Integration tests for the HTTP layer, using Flask's test client.
"""

from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter

from app import create_app


ADDRESS = {
    "name": "Asha Rao",
    "address": "12 Lake Road",
    "pincode": "560001",
    "email": "asha@example.com",
    "mobile": "9876543210",
}


@pytest.fixture
def app():
    return create_app("config.TestingConfig")


@pytest.fixture
def client(app):
    return app.test_client()


def _pdf_upload(pages: int, name: str):
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buffer = BytesIO()
    writer.write(buffer)
    buffer.seek(0)
    return buffer, name


def _png_upload(width: int, height: int, name: str):
    buffer = BytesIO()
    Image.new("RGB", (width, height)).save(buffer, format="PNG")
    buffer.seek(0)
    return buffer, name


# Service info

class TestMainRoutes:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_index_lists_options(self, client):
        data = client.get("/").get_json()

        assert data["page"]["label"] == "A4"
        assert "matte" in data["paper_types"]
        assert data["delivery_speeds"] == ["standard", "express"]
        assert data["pricing"]["default_price"] == 20

    def test_unknown_route_is_json_404(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert "error" in response.get_json()


# Layout and quotes

class TestLayoutRoute:

    def test_layout_with_overrides(self, client):
        response = client.post("/api/layout", json={
            "items": [
                {"width": 5, "height": 5, "copies": 3, "label": "A"},
                {"width": 8, "height": 8, "copies": 1, "label": "B"},
                {"width": 120, "height": 50, "copies": 1, "label": "C"},
            ],
            "page": {"width": 100, "height": 100},
            "padding": 5,
        })

        data = response.get_json()
        assert response.status_code == 200
        assert data["page_count"] == 1
        assert data["placed_count"] == 4
        placements = data["pages"][0]["placements"]
        assert [(p["x"], p["y"]) for p in placements] == [(5, 5), (15, 5), (25, 5), (35, 5)]
        assert [p["label"] for p in placements] == ["A", "A", "A", "B"]

    def test_layout_uses_configured_sheet(self, client):
        data = client.post("/api/layout", json={
            "items": [{"width": 10, "height": 10, "copies": 1}],
        }).get_json()

        assert data["page"] == {"width": 20, "height": 28}
        assert data["padding"] == 0.5

    def test_bad_padding(self, client):
        response = client.post("/api/layout", json={"items": [], "padding": -1})

        assert response.status_code == 400

    def test_non_json_body(self, client):
        response = client.post("/api/layout", data="width=5", content_type="text/plain")

        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object"


class TestQuoteRoutes:

    def test_photo_quote(self, client):
        data = client.post("/api/quote/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 2}],
            "paper_type": "matte",
            "delivery_speed": "standard",
        }).get_json()

        assert data["subtotal"] == 22
        assert data["delivery_charge"] == 45
        assert data["total"] == 67

    def test_photo_quote_defaults_options(self, client):
        data = client.post("/api/quote/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 1}],
        }).get_json()

        assert data["paper_type"] == "photo"
        assert data["delivery_speed"] == "standard"
        assert data["total"] == 55

    def test_lenient_photo_quote_prices_bad_item_at_zero(self, client):
        response = client.post("/api/quote/photo", json={
            "items": [{"width": -5, "height": 10, "copies": 2}],
        })

        assert response.status_code == 200
        assert response.get_json()["total"] == 0

    def test_strict_photo_quote_rejects_bad_item(self, client):
        response = client.post("/api/quote/photo", json={
            "items": [{"width": -5, "height": 10, "copies": 2}],
            "strict": True,
        })

        data = response.get_json()
        assert response.status_code == 400
        assert data["details"]["field"] == "width"
        assert data["details"]["index"] == 0

    def test_document_quote(self, client):
        data = client.post("/api/quote/document", json={
            "bw_pages": 2,
            "color_pages": 3,
            "copies": 2,
            "delivery_speed": "express",
        }).get_json()

        assert data["printing_subtotal"] == 42
        assert data["total"] == 142

    def test_document_quote_page_mismatch(self, client):
        data = client.post("/api/quote/document", json={
            "bw_pages": 4,
            "color_pages": 3,
            "total_pages": 5,
        }).get_json()

        assert data["total"] == 0
        assert data["error"] == "Page count exceeds total pages."

    def test_estimate(self, client):
        data = client.post("/api/estimate", json={
            "width": 3.5, "height": 4.5, "quantity": 45,
        }).get_json()

        assert data == {"photos_per_page": 30, "pages_required": 2}


# Uploads

class TestUploadRoutes:

    def test_photo_size(self, client):
        response = client.post(
            "/api/photo-size",
            data={"photo": _png_upload(96, 192, "holiday.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        assert response.get_json() == {"filename": "holiday.png", "width": 2.5, "height": 5.1}

    def test_photo_size_requires_file(self, client):
        response = client.post("/api/photo-size", data={}, content_type="multipart/form-data")

        assert response.status_code == 400
        assert response.get_json()["details"]["missing"] == ["photo"]

    def test_photo_size_rejects_extension(self, client):
        response = client.post(
            "/api/photo-size",
            data={"photo": (BytesIO(b"x"), "notes.txt")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400

    def test_photo_size_unreadable_image(self, client):
        response = client.post(
            "/api/photo-size",
            data={"photo": (BytesIO(b"not an image"), "fake.jpg")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert response.get_json()["details"]["filename"] == "fake.jpg"

    def test_photo_size_image_over_pixel_limit(self, client, monkeypatch):
        upload = _png_upload(200, 200, "poster.png")
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        response = client.post(
            "/api/photo-size",
            data={"photo": upload},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert response.get_json()["details"]["filename"] == "poster.png"

    def test_document_pages(self, client):
        response = client.post(
            "/api/document-pages",
            data={"files": [
                _pdf_upload(2, "a.pdf"),
                _pdf_upload(3, "b.pdf"),
                (BytesIO(b"hello"), "c.txt"),
            ]},
            content_type="multipart/form-data",
        )

        data = response.get_json()
        assert response.status_code == 200
        assert data["total_pages"] == 5
        assert [doc["name"] for doc in data["documents"]] == ["a.pdf", "b.pdf"]
        assert data["rejected"] == [{"name": "c.txt", "reason": "not a PDF"}]


# Invoices

class TestInvoiceRoute:

    def test_photo_invoice(self, client):
        response = client.post("/api/invoice/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 2}],
            "paper_type": "matte",
            "delivery_speed": "standard",
            "address": ADDRESS,
        })

        assert response.status_code == 200
        assert response.mimetype == "application/pdf"
        assert "invoice-photo.pdf" in response.headers["Content-Disposition"]
        text = PdfReader(BytesIO(response.data)).pages[0].extract_text()
        assert "Rs. 67.00" in text

    def test_document_invoice(self, client):
        response = client.post("/api/invoice/document", json={
            "bw_pages": 2,
            "color_pages": 3,
            "copies": 2,
            "delivery_speed": "express",
            "address": ADDRESS,
        })

        assert response.status_code == 200
        assert response.data.startswith(b"%PDF")

    def test_address_is_sanitized(self, client):
        address = {**ADDRESS, "name": "<b>Asha</b> Rao"}

        response = client.post("/api/invoice/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 1}],
            "address": address,
        })

        text = PdfReader(BytesIO(response.data)).pages[0].extract_text()
        assert "Asha Rao" in text
        assert "<b>" not in text

    def test_renderer_receives_quote_and_clean_address(self, app):
        renderer = MagicMock()
        renderer.render.return_value = b"%PDF-1.4 stub"
        app.config["INVOICE_RENDERER"] = renderer

        response = app.test_client().post("/api/invoice/document", json={
            "bw_pages": 1,
            "color_pages": 0,
            "address": {**ADDRESS, "address": "  12 Lake Road <script>x</script> "},
        })

        assert response.status_code == 200
        assert response.data == b"%PDF-1.4 stub"
        quote, address = renderer.render.call_args.args
        assert quote.total == 3 + 45
        assert address["address"] == "12 Lake Road x"

    def test_incomplete_address(self, client):
        response = client.post("/api/invoice/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 1}],
            "address": {"name": "Asha"},
        })

        assert response.status_code == 400
        assert response.get_json()["details"]["missing"] == [
            "address", "email", "mobile", "pincode",
        ]

    def test_invoice_is_strict(self, client):
        response = client.post("/api/invoice/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 1}],
            "paper_type": "papyrus",
            "address": ADDRESS,
        })

        assert response.status_code == 400
        assert response.get_json()["details"]["option"] == "paper type"

    def test_document_invoice_rejects_fractional_copies(self, client):
        response = client.post("/api/invoice/document", json={
            "bw_pages": 2,
            "color_pages": "abc",
            "copies": "2.5",
            "address": ADDRESS,
        })

        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "color_pages"

    def test_zero_total_is_not_invoiced(self, client):
        response = client.post("/api/invoice/photo", json={
            "items": [{"width": 10, "height": 10, "copies": 0}],
            "address": ADDRESS,
        })

        assert response.status_code == 400

    def test_unknown_kind(self, client):
        response = client.post("/api/invoice/poster", json={"address": ADDRESS})

        assert response.status_code == 400
