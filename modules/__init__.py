"""Helper modules for the PrintDelivery application."""

__all__ = [
    "image_sizing",
    "invoice",
    "layout_packer",
    "pdf_analyzer",
    "pricing_engine",
    "validation",
]
