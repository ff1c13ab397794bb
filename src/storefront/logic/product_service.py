"""Business logic for the read-only product catalog."""

from typing import List

from storefront.dal import TableStore
from storefront.dal.schema import HeaderIndex
from storefront.handlers.utils.observability import logger, tracer
from storefront.models.product import Product

DEFAULT_PRODUCTS_TABLE = 'Products'


class ProductService:
    """Reads products from the Products table."""

    def __init__(self, table_store: TableStore, table_name: str = DEFAULT_PRODUCTS_TABLE) -> None:
        self.store = table_store
        self.table_name = table_name

    @tracer.capture_method
    def list_products(self) -> List[Product]:
        """Return every product row; empty when the table is missing or has no data rows."""
        values = self.store.get_values(self.table_name)
        if not values or len(values) <= 1:
            logger.info(f'No products in table: {self.table_name}')
            return []
        index = HeaderIndex(values[0])
        products = [Product.from_row(index, row) for row in values[1:]]
        logger.debug(f'Listed {len(products)} products')
        return products
