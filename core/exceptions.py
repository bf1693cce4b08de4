"""
Custom exceptions for PrintDelivery.

Exception Hierarchy:
    PrintDeliveryError (base)
    ├── InvalidPrintItemError  - Item rejected by the strict validator
    ├── UnknownOptionError     - Paper type / delivery speed not offered
    ├── InvalidRequestError    - Malformed HTTP request body
    └── ImageReadError         - Uploaded photo could not be decoded

Usage:
    The layout packer and pricing engine never raise on user input; they
    degrade to zero pages or zero cost. These exceptions are raised only by
    the strict validating wrapper and the HTTP layer, and every one of them
    is reported to the client as a 400 response.
"""

from typing import Optional, Dict, Any, Iterable


class PrintDeliveryError(Exception):
    """
    Base exception for all PrintDelivery errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidPrintItemError(PrintDeliveryError):
    """
    A print item failed strict validation.

    Raised for non-numeric, non-finite or non-positive dimensions and for
    copy counts that are negative or not whole numbers.
    """

    def __init__(self, field: str, value: Any, index: Optional[int] = None):
        position = f"item {index}" if index is not None else "item"
        message = f"Invalid {field} for {position}: {value!r}"
        details = {"field": field, "value": repr(value)}
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.index = index


class UnknownOptionError(PrintDeliveryError):
    """A paper type or delivery speed that the pricing schedule does not offer."""

    def __init__(self, option: str, value: Any, allowed: Iterable[str]):
        allowed_list = sorted(allowed)
        message = f"Unknown {option}: {value!r}"
        details = {
            "option": option,
            "value": repr(value),
            "allowed": allowed_list,
        }
        super().__init__(message, details)
        self.option = option
        self.value = value
        self.allowed = allowed_list


class InvalidRequestError(PrintDeliveryError):
    """
    The request is missing, not JSON, lacks required fields, or carries a
    field value that cannot be used (named in ``details["field"]``).
    """

    def __init__(
        self,
        message: str,
        missing: Optional[Iterable[str]] = None,
        field: Optional[str] = None,
    ):
        details: Dict[str, Any] = {}
        if missing:
            details["missing"] = sorted(missing)
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class ImageReadError(PrintDeliveryError):
    """
    An uploaded photo could not be opened.

    Photo dimensions are derived from the image's pixel size, so an
    undecodable upload leaves nothing to size from.
    """

    def __init__(self, filename: str, reason: str):
        message = f"Could not read image {filename!r}"
        details = {"filename": filename, "reason": reason}
        super().__init__(message, details)
        self.filename = filename
        self.reason = reason
