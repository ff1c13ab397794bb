"""
In-memory implementation of the table store.

Used by the test suite and by local runs with TABLE_STORE_BACKEND=memory.
Tables live for the lifetime of the process.
"""

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from storefront.dal import BaseTableStore
from storefront.handlers.utils.observability import logger


class InMemoryTableStore(BaseTableStore):
    """Table store backed by a dict of row lists."""

    store_name = 'memory'

    def __init__(self, tables: Optional[Dict[str, List[List[Any]]]] = None) -> None:
        self._tables: Dict[str, List[List[Any]]] = {
            name: [list(row) for row in rows] for name, rows in (tables or {}).items()
        }
        logger.debug('In-memory table store initialized', extra={'tables': sorted(self._tables)})

    def get_values(self, table_name: str) -> Optional[List[List[Any]]]:
        rows = self._tables.get(table_name)
        if rows is None:
            return None
        return copy.deepcopy(rows)

    def create_table(self, table_name: str, header: Sequence[str]) -> None:
        rows = self._tables.setdefault(table_name, [])
        if rows:
            rows[0] = list(header)
        else:
            rows.append(list(header))

    def append_row(self, table_name: str, row: Sequence[Any]) -> None:
        self._table(table_name).append(list(row))

    def update_cell(self, table_name: str, row_number: int, column_number: int, value: Any) -> None:
        row = self._row(table_name, row_number)
        if column_number < 1:
            raise IndexError(f'Column {column_number} is out of range')
        if column_number > len(row):
            row.extend([''] * (column_number - len(row)))
        row[column_number - 1] = value

    def delete_row(self, table_name: str, row_number: int) -> None:
        self._row(table_name, row_number)
        del self._table(table_name)[row_number - 1]

    def health_check(self) -> Dict[str, str]:
        return {
            'status': 'healthy',
            'store': self.store_name,
            'tables': ','.join(sorted(self._tables)),
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }

    def _table(self, table_name: str) -> List[List[Any]]:
        try:
            return self._tables[table_name]
        except KeyError:
            raise KeyError(f'Table not found: {table_name}') from None

    def _row(self, table_name: str, row_number: int) -> List[Any]:
        rows = self._table(table_name)
        if not 1 <= row_number <= len(rows):
            raise IndexError(f'Row {row_number} is out of range for table {table_name}')
        return rows[row_number - 1]
