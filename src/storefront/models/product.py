"""
Product catalog model.

Products are read-only; they are maintained by hand in the Products table and
mapped from rows through a normalized header lookup.
"""

from typing import Annotated, Any, Sequence

from pydantic import BaseModel, ConfigDict, Field

from storefront.dal.schema import PRODUCTS_SCHEMA, HeaderIndex, to_number


class Product(BaseModel):
    """A catalog entry as served to the storefront."""

    model_config = ConfigDict(populate_by_name=True)

    id: Annotated[str, Field(description='Product identifier', examples=['P1'])] = ''

    title: Annotated[str, Field(description='Display title', examples=['Mango pickle 500g'])] = ''

    description: Annotated[str, Field(description='Free-text description')] = ''

    price: Annotated[float, Field(description='Unit price', examples=[249.0])] = 0.0

    image_url: Annotated[str, Field(
        alias='imageUrl',
        description='Absolute URL of the product image'
    )] = ''

    @classmethod
    def from_row(cls, index: HeaderIndex, row: Sequence[Any]) -> 'Product':
        """Map one data row; missing or blank cells become '' (text) or 0 (price)."""
        values = {}
        for column in PRODUCTS_SCHEMA.columns:
            cell = index.cell(row, column.name)
            if column.kind == 'number':
                values[column.field] = to_number(cell)
            else:
                values[column.field] = '' if cell is None or cell == '' else str(cell)
        return cls(**values)
