"""
Configuration for PrintDelivery.

Values are read from the environment (and a local .env file) once, at
import time. Every layout and pricing default used by the HTTP layer
lives here so a deployment can retune them without code changes.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB uploads
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Layout Configuration
    # ==========================================================================
    # Printable area of one output sheet, in centimetres. The defaults are
    # the printable region of an A4 sheet (21 x 29.7 cm minus margins).
    #
    # LAYOUT_PADDING_CM is the gap kept between photos and from the sheet
    # edges when laying out a photo order.
    # ==========================================================================
    PAGE_WIDTH_CM = float(os.environ.get("PAGE_WIDTH_CM", "20"))
    PAGE_HEIGHT_CM = float(os.environ.get("PAGE_HEIGHT_CM", "28"))
    PAGE_LABEL = os.environ.get("PAGE_LABEL", "A4")
    LAYOUT_PADDING_CM = float(os.environ.get("LAYOUT_PADDING_CM", "0.5"))

    # Screen DPI assumed when converting uploaded photo pixels to centimetres
    PHOTO_DPI = float(os.environ.get("PHOTO_DPI", "96"))

    # ==========================================================================
    # Order Defaults
    # ==========================================================================
    DEFAULT_PAPER_TYPE = os.environ.get("DEFAULT_PAPER_TYPE", "photo")
    DEFAULT_DELIVERY_SPEED = os.environ.get("DEFAULT_DELIVERY_SPEED", "standard")
    MAX_ORDER_ITEMS = int(os.environ.get("MAX_ORDER_ITEMS", "200"))

    # ==========================================================================
    # Invoice Configuration
    # ==========================================================================
    INVOICE_BRAND_NAME = os.environ.get("INVOICE_BRAND_NAME", "DocuEase")
    INVOICE_FOOTER = os.environ.get(
        "INVOICE_FOOTER", "www.docuease.com | contact@docuease.com"
    )
    CURRENCY_PREFIX = os.environ.get("CURRENCY_PREFIX", "Rs.")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
