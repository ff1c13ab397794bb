"""
Storefront Sheets API Service Module.

A serverless backend for a small storefront whose product catalog and order
book are kept in a spreadsheet. The package follows a three-layer layout:

- handlers: API Gateway entry point, action routing and response envelopes
- logic: catalog and order operations over header-indexed tables
- dal: table store interface with Google Sheets and in-memory implementations
- models: request commands, response envelopes and domain models
- security: Google service account credential loading
"""

__version__ = "1.0.0"
__description__ = "Storefront API over Google Sheets"

from storefront.models.order import Order
from storefront.models.product import Product
from storefront.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "Order",
    "Product",
    "logger",
    "tracer",
    "metrics",
]
