"""
API routes (JSON endpoints).

Handles:
- /api/layout            - Lay photos out on sheets
- /api/quote/photo       - Price and lay out a photo order
- /api/quote/document    - Price a document order
- /api/estimate          - Uniform-grid sheet estimate for one photo size
- /api/photo-size        - Photo print size from an uploaded image
- /api/document-pages    - Page counts of uploaded PDFs
- /api/invoice/<kind>    - PDF invoice for a photo or document order

Errors raised as PrintDeliveryError subclasses are turned into 400
responses by the handler registered in create_app().
"""

from io import BytesIO

import bleach
from flask import (
    Blueprint,
    current_app,
    jsonify,
    request,
    send_file,
)
from werkzeug.utils import secure_filename

from core.exceptions import InvalidRequestError
from logging_config import get_logger
from models.layout import PageSize
from models.print_item import is_positive_finite, parse_dimension
from modules.image_sizing import photo_size_from_image
from modules.invoice import ADDRESS_FIELDS
from modules.validation import validate_address


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")

# Constants
ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "bmp", "webp", "tif", "tiff"}
ALLOWED_DOCUMENT_EXTENSIONS = {"pdf"}
MAX_ADDRESS_FIELD_LENGTH = 300


def _allowed_file(filename: str, allowed: set) -> bool:
    """Check if file extension is allowed."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed


def _sanitize_text(text: str, max_length: int = None) -> str:
    """Sanitize user input text."""
    if not text:
        return ""
    text = text.strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def _quote_service():
    return current_app.config["QUOTE_SERVICE"]


def _options(data: dict) -> tuple:
    return (
        data.get("paper_type") or current_app.config["DEFAULT_PAPER_TYPE"],
        data.get("delivery_speed") or current_app.config["DEFAULT_DELIVERY_SPEED"],
    )


def _page_override(data: dict):
    page = data.get("page")
    if page is None:
        return None
    if not isinstance(page, dict):
        raise InvalidRequestError("'page' must be an object with width and height")
    width = parse_dimension(page.get("width"))
    height = parse_dimension(page.get("height"))
    if not (is_positive_finite(width) and is_positive_finite(height)):
        raise InvalidRequestError("'page' width and height must be positive numbers")
    return PageSize(width, height)


def _padding_override(data: dict):
    if data.get("padding") is None:
        return None
    padding = parse_dimension(data["padding"])
    if padding is None or not (padding == 0 or is_positive_finite(padding)):
        raise InvalidRequestError("'padding' must be a non-negative number")
    return padding


def _total_pages(data: dict):
    total_pages = data.get("total_pages")
    if total_pages is None:
        return None
    if isinstance(total_pages, bool) or not isinstance(total_pages, int) or total_pages < 0:
        raise InvalidRequestError("'total_pages' must be a non-negative integer")
    return total_pages


@api_bp.route("/layout", methods=["POST"])
def layout():
    """Lay the posted items out on sheets; the sheet and padding may be overridden."""
    data = _json_body()
    service = _quote_service()

    items = service.build_items(data.get("items"))
    page_size = _page_override(data) or service.page_size
    padding = _padding_override(data)
    pages = service.layout(items, page_size, padding)

    return jsonify({
        "page": page_size.to_dict(),
        "padding": service.padding if padding is None else padding,
        "page_count": len(pages),
        "placed_count": sum(len(page) for page in pages),
        "pages": [page.to_dict() for page in pages],
    })


@api_bp.route("/quote/photo", methods=["POST"])
def quote_photo():
    data = _json_body()
    paper_type, delivery_speed = _options(data)
    quote = _quote_service().quote_photos(
        data.get("items"),
        paper_type,
        delivery_speed,
        strict=bool(data.get("strict", False)),
    )
    return jsonify(quote.to_dict())


@api_bp.route("/quote/document", methods=["POST"])
def quote_document():
    data = _json_body()
    _, delivery_speed = _options(data)
    quote = _quote_service().quote_documents(
        data.get("bw_pages"),
        data.get("color_pages"),
        data.get("copies"),
        delivery_speed,
        total_pages=_total_pages(data),
        strict=bool(data.get("strict", False)),
    )
    return jsonify(quote.to_dict())


@api_bp.route("/estimate", methods=["POST"])
def estimate():
    """Quick sheet estimate for ``copies`` photos of one size."""
    data = _json_body()
    grid = _quote_service().estimate_grid(
        data.get("width"), data.get("height"), data.get("copies", data.get("quantity"))
    )
    return jsonify(grid.to_dict())


@api_bp.route("/photo-size", methods=["POST"])
def photo_size():
    """
    Size an uploaded photo in centimetres.

    The size is what the image would measure on screen at PHOTO_DPI, and
    is meant to prefill the width/height fields of a photo order.
    """
    photo = request.files.get("photo")
    if not photo or photo.filename == "":
        raise InvalidRequestError("Please upload an image file", missing=["photo"])

    filename = secure_filename(photo.filename)
    if not _allowed_file(photo.filename, ALLOWED_IMAGE_EXTENSIONS):
        raise InvalidRequestError(f"Unsupported image type: {filename}")

    width, height = photo_size_from_image(
        photo.read(), filename, dpi=current_app.config["PHOTO_DPI"]
    )
    logger.info(f"Sized photo {filename}: {width}x{height} cm")
    return jsonify({"filename": filename, "width": width, "height": height})


@api_bp.route("/document-pages", methods=["POST"])
def document_pages():
    """Count pages across uploaded PDFs; non-PDF uploads are reported, not read."""
    uploads = request.files.getlist("files")
    if not uploads:
        raise InvalidRequestError("Please upload at least one PDF", missing=["files"])

    accepted = []
    rejected = []
    for upload in uploads:
        filename = secure_filename(upload.filename or "")
        if not _allowed_file(upload.filename or "", ALLOWED_DOCUMENT_EXTENSIONS):
            rejected.append({"name": filename, "reason": "not a PDF"})
            continue
        accepted.append((filename, BytesIO(upload.read())))

    result = current_app.config["PDF_ANALYZER"].count_pages(accepted)
    result["rejected"] = rejected
    logger.info(
        f"Counted {result['total_pages']} page(s) in {len(accepted)} document(s), "
        f"{len(rejected)} rejected"
    )
    return jsonify(result)


@api_bp.route("/invoice/<kind>", methods=["POST"])
def invoice(kind: str):
    """
    Render a PDF invoice for a finished photo or document order.

    Unlike the quote endpoints, input is always validated strictly: an
    invoice is never issued for an order with typos in it.
    """
    if kind not in ("photo", "document"):
        raise InvalidRequestError(f"Unknown invoice type: {kind}")

    data = _json_body()
    address = validate_address(data.get("address"), ADDRESS_FIELDS)
    address = {
        name: _sanitize_text(value, max_length=MAX_ADDRESS_FIELD_LENGTH)
        for name, value in address.items()
    }

    service = _quote_service()
    paper_type, delivery_speed = _options(data)
    if kind == "photo":
        quote = service.quote_photos(data.get("items"), paper_type, delivery_speed, strict=True)
    else:
        quote = service.quote_documents(
            data.get("bw_pages"),
            data.get("color_pages"),
            data.get("copies"),
            delivery_speed,
            total_pages=_total_pages(data),
            strict=True,
        )
        if quote.error:
            raise InvalidRequestError(quote.error)

    if quote.total == 0:
        raise InvalidRequestError("Nothing to invoice: the order total is zero")

    pdf_bytes = current_app.config["INVOICE_RENDERER"].render(quote, address)
    logger.info(f"Issued {kind} invoice for {quote.total:.2f}")

    return send_file(
        BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=f"invoice-{kind}.pdf",
    )
