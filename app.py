"""
PrintDelivery - Flask Application Entry Point.

A slim app factory that:
1. Loads configuration (.env + config.Config)
2. Configures logging
3. Creates the shared quote service, PDF analyzer and invoice renderer
4. Registers route blueprints and the request-id hooks
5. Sets up JSON error handlers

The quoting core (layout packer, pricing engine) is pure and holds no
state, so a single QuoteService instance is shared by all request
threads. The invoice renderer draws each invoice on its own canvas and is
shared the same way.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import get_logger, init_request_logging, setup_logging
from core.exceptions import PrintDeliveryError
from models.layout import PageSize
from modules.invoice import InvoiceRenderer
from modules.pdf_analyzer import PDFAnalyzer
from routes import register_blueprints
from services.quote_service import QuoteService


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In PyInstaller bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(config_object: Optional[str] = None) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the config class
            (default: "config.Config")

    Returns:
        Configured Flask application
    """
    # Use override=True so .env file always takes precedence over shell environment
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object or "config.Config")

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        app_name="print_delivery",
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintDelivery in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # SERVICES
    # =========================================================================

    page_size = PageSize(app.config["PAGE_WIDTH_CM"], app.config["PAGE_HEIGHT_CM"])
    app.config["QUOTE_SERVICE"] = QuoteService(
        page_size=page_size,
        padding=app.config["LAYOUT_PADDING_CM"],
        page_label=app.config["PAGE_LABEL"],
        max_items=app.config["MAX_ORDER_ITEMS"],
    )
    logger.info(
        f"Quote service ready: {page_size.width}x{page_size.height} cm sheets, "
        f"{app.config['LAYOUT_PADDING_CM']} cm padding"
    )

    app.config["PDF_ANALYZER"] = PDFAnalyzer()
    app.config["INVOICE_RENDERER"] = InvoiceRenderer(
        brand_name=app.config["INVOICE_BRAND_NAME"],
        footer_text=app.config["INVOICE_FOOTER"],
        currency=app.config["CURRENCY_PREFIX"],
    )

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)
    init_request_logging(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(PrintDeliveryError)
    def handle_app_error(e):
        logger.warning(f"Rejected request: {e}")
        return jsonify({"error": e.message, "details": e.details}), 400

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        return jsonify({"error": f"File too large. Maximum upload size is {max_mb:.0f} MB."}), 413

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred. Please try again."}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
