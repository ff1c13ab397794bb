"""
Input models for request validation using Pydantic.

Write requests arrive as form-encoded (or JSON) property bags. Each action is
parsed into one of the command models below at the handler boundary. The only
validation performed is coercion: numeric fields fall back to 0 and missing
text fields to the empty string.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from storefront.dal.schema import to_number


class FormCommand(BaseModel):
    """Base for commands parsed from camelCase request fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra='ignore',
    )

    @field_validator('*', mode='before')
    @classmethod
    def blank_missing_text(cls, v: Any, info: ValidationInfo) -> Any:
        """JSON nulls in text fields behave like absent fields."""
        if v is None and cls.model_fields[info.field_name].annotation is str:
            return ''
        return v


class CreateOrderCommand(FormCommand):
    """Request model for placing a new order."""

    product_id: Annotated[str, Field(description='Identifier of the ordered product', examples=['P1'])] = ''

    product_title: Annotated[str, Field(description='Title of the ordered product')] = ''

    unit_price: Annotated[float, Field(description='Price of one unit', examples=[10.0])] = 0.0

    quantity: Annotated[float, Field(description='Number of units', examples=[3])] = 0.0

    extra_amount: Annotated[float, Field(description='Delivery or packing charges')] = 0.0

    total_amount: Annotated[Optional[float], Field(
        description='Order total; unit_price * quantity + extra_amount when omitted'
    )] = None

    customer_name: Annotated[str, Field(description='Name of the customer', examples=['Asha Rao'])] = ''

    phone: Annotated[str, Field(description='Customer phone number', examples=['555-1234'])] = ''

    address: Annotated[str, Field(description='Delivery address')] = ''

    pin: Annotated[str, Field(description='Postal code; preferred over pinCode')] = ''

    pin_code: Annotated[str, Field(description='Postal code')] = ''

    place: Annotated[str, Field(description='Town or locality')] = ''

    @field_validator('unit_price', 'quantity', 'extra_amount', mode='before')
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        return to_number(v)

    @field_validator('total_amount', mode='before')
    @classmethod
    def coerce_optional_number(cls, v: Any) -> Optional[float]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return to_number(v)

    @model_validator(mode='after')
    def default_total_amount(self) -> 'CreateOrderCommand':
        if self.total_amount is None:
            self.total_amount = self.unit_price * self.quantity + self.extra_amount
        return self

    @property
    def persisted_pin_code(self) -> str:
        """Value stored in the PinCode column."""
        return self.pin or self.pin_code


class UpdateOrderCommand(FormCommand):
    """Request model for a partial order update; empty values are ignored."""

    order_id: Annotated[str, Field(alias='orderId', description='Identifier of the order to update')] = ''

    status: Annotated[str, Field(description='New free-text status', examples=['SHIPPED'])] = ''

    phone: Annotated[str, Field(description='New phone number')] = ''

    address: Annotated[str, Field(description='New delivery address')] = ''

    pin: Annotated[str, Field(description='New postal code, stored in PinCode')] = ''

    place: Annotated[str, Field(description='New town or locality')] = ''


class DeleteOrderCommand(FormCommand):
    """Request model for removing an order."""

    order_id: Annotated[str, Field(alias='orderId', description='Identifier of the order to delete')] = ''
