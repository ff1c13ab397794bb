"""
Business Logic Layer Module.

The logic layer sits between the request router and the table stores. It owns
the Products / Orders table layouts, header discovery and the linear
scan/filter/update/delete over rows:

- ProductService: read-only catalog listing
- OrderService: create, list, filter by phone, partial update, delete
"""

from storefront.logic.order_service import OrderService
from storefront.logic.product_service import ProductService

__all__ = [
    "OrderService",
    "ProductService",
]
