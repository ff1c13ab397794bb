"""
Business Logic Layer for Order Management.

Orders live as rows of the Orders table. Every operation re-reads the table,
locates its header row and works by linear scan; there is no locking, so two
concurrent writers to the same row race and the last write wins.
"""

from typing import Any, Dict, List, Optional

from storefront.dal import TableStore
from storefront.dal.schema import ORDERS_SCHEMA, HeaderIndex
from storefront.handlers.utils.errors import MissingIdError, NotFoundError
from storefront.handlers.utils.observability import count, logger, tracer
from storefront.models.input import CreateOrderCommand, UpdateOrderCommand
from storefront.models.order import Order

DEFAULT_ORDERS_TABLE = 'Orders'

# Fields an update may touch, with the column each one is written to
UPDATABLE_COLUMNS = (
    ('status', 'Status'),
    ('phone', 'Phone'),
    ('address', 'Address'),
    ('pin', 'PinCode'),
    ('place', 'Place'),
)


class OrderService:
    """Business logic service for order management."""

    def __init__(self, table_store: TableStore, table_name: str = DEFAULT_ORDERS_TABLE) -> None:
        """
        Initialize order service.

        Args:
            table_store: Store holding the Orders table
            table_name: Name of the Orders table
        """
        self.store = table_store
        self.table_name = table_name

    @tracer.capture_method
    def create_order(self, command: CreateOrderCommand) -> str:
        """
        Append a new order, creating the Orders table on first use.

        Args:
            command: Validated create request

        Returns:
            Identifier of the new order
        """
        values = self.store.get_values(self.table_name)
        # a blank worksheet reads back as [[]]
        if not values or not any(str(cell).strip() for cell in values[0]):
            self.store.create_table(self.table_name, ORDERS_SCHEMA.header)
            header = ORDERS_SCHEMA.header
            logger.info(f'Initialized orders table: {self.table_name}')
        else:
            header = values[0]

        order = Order.create(command)
        self.store.append_row(self.table_name, ORDERS_SCHEMA.to_row(order.to_record(), header))

        logger.info(f'Order created: {order.order_id}', extra={
            'product_id': order.product_id,
            'total_amount': order.total_amount,
        })
        tracer.put_annotation('order_id', order.order_id)
        count('OrderCreated')
        return order.order_id

    @tracer.capture_method
    def list_all_orders(self) -> List[Dict[str, Any]]:
        """Return every order as an object keyed by header name, in table order."""
        values = self.store.get_values(self.table_name)
        if not values or len(values) <= 1:
            return []
        index = HeaderIndex(values[0])
        orders = [index.to_object(row) for row in values[1:]]
        logger.debug(f'Listed {len(orders)} orders')
        return orders

    @tracer.capture_method
    def list_orders_by_phone(self, phone: str) -> List[Dict[str, Any]]:
        """
        Return the orders whose stored phone equals ``phone``.

        Both sides are trimmed before an exact comparison; substrings do not match.
        """
        wanted = str(phone).strip()
        values = self.store.get_values(self.table_name)
        if not values or len(values) <= 1:
            return []
        index = HeaderIndex(values[0])
        if 'Phone' not in index:
            logger.warning(f'Orders table {self.table_name} has no Phone column')
            return []

        matches = [
            index.to_object(row)
            for row in values[1:]
            if _cell_text(index.cell(row, 'Phone')) == wanted
        ]
        logger.debug(f'Found {len(matches)} orders for phone lookup')
        return matches

    @tracer.capture_method
    def update_order(self, command: UpdateOrderCommand) -> None:
        """
        Overwrite the supplied fields of the first order with a matching id.

        Only non-empty status, phone, address, pin and place values are
        written, and only to columns present in the header.

        Raises:
            MissingIdError: If no order id was given
            NotFoundError: If the table is missing or empty, or no row matches
        """
        if not command.order_id:
            raise MissingIdError()
        values = self.store.get_values(self.table_name)
        if values is None:
            raise NotFoundError('Orders sheet not found', resource_id=command.order_id)
        if len(values) <= 1:
            raise NotFoundError('No orders', resource_id=command.order_id)

        index = HeaderIndex(values[0])
        row_number = self._find_row(index, values, command.order_id)
        if row_number is None:
            raise NotFoundError('Order not found', resource_id=command.order_id)

        updated = []
        for field, column_name in UPDATABLE_COLUMNS:
            value = getattr(command, field)
            position = index.position(column_name)
            if not value or position is None:
                continue
            self.store.update_cell(self.table_name, row_number, position + 1, value)
            updated.append(column_name)

        logger.info(f'Order updated: {command.order_id}', extra={'columns': updated})
        tracer.put_annotation('order_id', command.order_id)
        count('OrderUpdated')

    @tracer.capture_method
    def delete_order(self, order_id: Optional[str]) -> None:
        """
        Physically remove the first order with a matching id.

        Raises:
            MissingIdError: If no order id was given
            NotFoundError: If the table is missing or no row matches
        """
        if not order_id:
            raise MissingIdError()
        values = self.store.get_values(self.table_name)
        if values is None:
            raise NotFoundError('Orders sheet not found', resource_id=order_id)
        if not values:
            raise NotFoundError('Order not found', resource_id=order_id)

        row_number = self._find_row(HeaderIndex(values[0]), values, order_id)
        if row_number is None:
            raise NotFoundError('Order not found', resource_id=order_id)

        self.store.delete_row(self.table_name, row_number)
        logger.info(f'Order deleted: {order_id}')
        tracer.put_annotation('order_id', order_id)
        count('OrderDeleted')

    def _find_row(self, index: HeaderIndex, values: List[List[Any]], order_id: str) -> Optional[int]:
        """1-based table row number of the first data row whose id equals ``order_id``."""
        position = index.position('OrderID')
        if position is None:
            position = 0
        wanted = str(order_id)
        for offset, row in enumerate(values[1:], start=2):
            cell = row[position] if position < len(row) else ''
            if _cell_text(cell, strip=False) == wanted:
                return offset
        return None


def _cell_text(value: Any, strip: bool = True) -> str:
    """String form of a cell as the storefront compares it."""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value)
    return text.strip() if strip else text
