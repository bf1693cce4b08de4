"""
Services for PrintDelivery.

- QuoteService: Combines the layout packer and pricing engine into
  photo and document quotes. Stateless; one instance serves all requests.
"""

from .quote_service import QuoteService

__all__ = [
    "QuoteService",
]
