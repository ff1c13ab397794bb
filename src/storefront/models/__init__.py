"""
Service Models Package

This package contains the Pydantic models used throughout the service:
request commands, response envelopes and the Order / Product domain models.
"""

from .input import CreateOrderCommand, DeleteOrderCommand, UpdateOrderCommand
from .order import NEW_ORDER_STATUS, Order
from .output import (
    CreateOrderResponse,
    ErrorResponse,
    HealthCheckResponse,
    PingResponse,
    SuccessResponse,
)
from .product import Product

__all__ = [
    # Input models
    "CreateOrderCommand",
    "UpdateOrderCommand",
    "DeleteOrderCommand",

    # Output models
    "CreateOrderResponse",
    "SuccessResponse",
    "PingResponse",
    "ErrorResponse",
    "HealthCheckResponse",

    # Domain models
    "Order",
    "Product",
    "NEW_ORDER_STATUS",
]
