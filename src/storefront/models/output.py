"""
Output models for API responses using Pydantic.

Every response body is an envelope whose ``status`` field tells the client how
to read the rest. List payloads (products, orders) are returned bare, as the
storefront page expects.
"""

from typing import Annotated, Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Envelope(BaseModel):
    """Base for envelope responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PingResponse(Envelope):
    """Response model for the ping action."""

    status: Literal['ok'] = 'ok'


class CreateOrderResponse(Envelope):
    """Response model for successful order creation."""

    status: Literal['success'] = 'success'

    order_id: Annotated[str, Field(
        description='Unique identifier for the created order'
    )]


class SuccessResponse(Envelope):
    """Response model for successful update and delete."""

    status: Literal['success'] = 'success'

    message: Annotated[str, Field(examples=['Order updated', 'Order deleted'])]


class ErrorResponse(Envelope):
    """Response model for every failure."""

    status: Literal['error'] = 'error'

    message: Annotated[str, Field(description='Human readable error description')]


class HealthCheckResponse(Envelope):
    """Response model for the health endpoint."""

    status: Literal['healthy', 'unhealthy']
    version: str = 'unknown'
    environment: str = 'unknown'
    checks: Dict[str, Dict[str, str]] = Field(default_factory=dict)
