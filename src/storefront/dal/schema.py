"""
Table schema descriptors shared by readers and writers.

A schema is an ordered list of typed columns. Writers never assume positions:
they resolve each cell of the table's own header row against the schema, so a
table whose header has been reordered by hand keeps receiving aligned rows.
"""

import math
import re
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

_WHITESPACE = re.compile(r'\s+')


def normalize_header(name: Any) -> str:
    """Lowercase a header cell and strip all whitespace from it."""
    return _WHITESPACE.sub('', str(name).strip().lower())


def to_number(value: Any) -> float:
    """Coerce a cell or form value to a finite number, falling back to 0."""
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    # nan and inf would serialize as invalid JSON
    return number if math.isfinite(number) else 0.0


class Column(NamedTuple):
    """A named, typed column of a table."""

    name: str
    field: str
    kind: str = 'str'

    @property
    def key(self) -> str:
        return normalize_header(self.name)

    @property
    def default(self) -> Any:
        return 0 if self.kind == 'number' else ''


class TableSchema:
    """Ordered column descriptor for one table."""

    def __init__(self, columns: Sequence[Column]) -> None:
        self.columns = list(columns)
        self._by_key = {column.key: column for column in self.columns}

    @property
    def header(self) -> List[str]:
        """Header row written when the table is created."""
        return [column.name for column in self.columns]

    def to_row(self, record: Dict[str, Any], header: Optional[Sequence[Any]] = None) -> List[Any]:
        """
        Lay out a record keyed by field name along a header row.

        Args:
            record: Values keyed by Column.field
            header: Existing header row; the schema header when omitted

        Returns:
            Row values in header order, with defaults for missing fields and
            empty strings for header cells the schema does not know
        """
        row = []
        for cell in header if header is not None else self.header:
            column = self._by_key.get(normalize_header(cell))
            if column is None:
                row.append('')
                continue
            value = record.get(column.field)
            row.append(column.default if value is None else value)
        return row


class HeaderIndex:
    """Normalized header name → zero-based column position for one header row."""

    def __init__(self, header: Sequence[Any]) -> None:
        self.names = [str(cell).strip() for cell in header]
        self._positions: Dict[str, int] = {}
        for position, name in enumerate(self.names):
            # first occurrence wins on duplicate headers
            self._positions.setdefault(normalize_header(name), position)

    def __contains__(self, name: str) -> bool:
        return normalize_header(name) in self._positions

    def position(self, name: str) -> Optional[int]:
        return self._positions.get(normalize_header(name))

    def cell(self, row: Sequence[Any], name: str, default: Any = '') -> Any:
        """Return the cell under ``name``, or ``default`` if the column or cell is absent."""
        position = self.position(name)
        if position is None or position >= len(row):
            return default
        return row[position]

    def to_object(self, row: Sequence[Any]) -> Dict[str, Any]:
        """Map a data row to an object keyed by trimmed header names."""
        padded = list(row) + [''] * (len(self.names) - len(row))
        return {name: padded[position] for position, name in enumerate(self.names)}


ORDERS_SCHEMA = TableSchema([
    Column('OrderID', 'order_id'),
    Column('Timestamp', 'timestamp'),
    Column('ProductID', 'product_id'),
    Column('ProductTitle', 'product_title'),
    Column('UnitPrice', 'unit_price', 'number'),
    Column('Quantity', 'quantity', 'number'),
    Column('ExtraAmount', 'extra_amount', 'number'),
    Column('TotalAmount', 'total_amount', 'number'),
    Column('CustomerName', 'customer_name'),
    Column('Phone', 'phone'),
    Column('Address', 'address'),
    Column('PinCode', 'pin_code'),
    Column('Place', 'place'),
    Column('Status', 'status'),
])

PRODUCTS_SCHEMA = TableSchema([
    Column('id', 'id'),
    Column('title', 'title'),
    Column('description', 'description'),
    Column('price', 'price', 'number'),
    Column('imageUrl', 'image_url'),
])
