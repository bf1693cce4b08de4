"""
Core module for PrintDelivery.

Contains the exception hierarchy shared by the validation, service and
route layers.
"""

from .exceptions import (
    PrintDeliveryError,
    InvalidPrintItemError,
    UnknownOptionError,
    InvalidRequestError,
    ImageReadError,
)

__all__ = [
    "PrintDeliveryError",
    "InvalidPrintItemError",
    "UnknownOptionError",
    "InvalidRequestError",
    "ImageReadError",
]
