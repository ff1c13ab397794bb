"""
Order domain model.

An order is one row of the Orders table. The model carries the typed values
written when an order is placed; reads hand back raw row objects keyed by the
table's own header names so that columns added by hand are not lost.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.models.input import CreateOrderCommand

# Status assigned to every new order. Status is free text afterwards.
NEW_ORDER_STATUS = 'NEW'


class Order(BaseModel):
    """Core Order domain model."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_id: Annotated[str, Field(
        description='Unique identifier for the order',
        examples=['0b8e7c1e-3f57-4a0e-a8c1-4f1f3f0f9a21']
    )]

    timestamp: Annotated[str, Field(
        description='ISO timestamp when the order was placed'
    )]

    product_id: str = ''
    product_title: str = ''
    unit_price: float = 0.0
    quantity: float = 0.0
    extra_amount: float = 0.0
    total_amount: float = 0.0
    customer_name: str = ''
    phone: str = ''
    address: str = ''
    pin_code: str = ''
    place: str = ''

    status: Annotated[str, Field(
        description='Free-text order status',
        examples=['NEW', 'SHIPPED']
    )] = NEW_ORDER_STATUS

    @classmethod
    def create(cls, command: CreateOrderCommand) -> 'Order':
        """
        Create a new order with a generated ID and timestamp.

        Args:
            command: Validated create request

        Returns:
            New Order instance with status NEW
        """
        return cls(
            order_id=str(uuid4()),
            timestamp=datetime.now(timezone.utc).isoformat(),
            product_id=command.product_id,
            product_title=command.product_title,
            unit_price=command.unit_price,
            quantity=command.quantity,
            extra_amount=command.extra_amount,
            total_amount=command.total_amount,
            customer_name=command.customer_name,
            phone=command.phone,
            address=command.address,
            pin_code=command.persisted_pin_code,
            place=command.place,
            status=NEW_ORDER_STATUS,
        )

    def to_record(self) -> Dict[str, Any]:
        """Values keyed by field name, ready for ORDERS_SCHEMA.to_row."""
        return self.model_dump()
