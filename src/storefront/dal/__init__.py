"""
Data Access Layer (DAL) for the storefront API.

This module defines the table store interface the logic layer is written
against, plus the factory that builds the configured implementation. A table
store holds named tables of rows whose first row is the header; row and
column numbers are 1-based and count the header row, as in a spreadsheet.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, Sequence, runtime_checkable

from storefront.handlers.models.env_vars import StorefrontEnvVars


@runtime_checkable
class TableStore(Protocol):
    """Protocol defining the table store interface."""

    def get_values(self, table_name: str) -> list[list[Any]] | None:
        """Return all rows of a table, header included, or None if the table does not exist."""
        ...

    def create_table(self, table_name: str, header: Sequence[str]) -> None:
        """Create a table whose first row is ``header``."""
        ...

    def append_row(self, table_name: str, row: Sequence[Any]) -> None:
        """Append a row after the last non-empty row."""
        ...

    def update_cell(self, table_name: str, row_number: int, column_number: int, value: Any) -> None:
        """Overwrite a single cell."""
        ...

    def delete_row(self, table_name: str, row_number: int) -> None:
        """Physically remove a row, shifting the rows below it up."""
        ...

    def health_check(self) -> dict[str, str]:
        """Report whether the store is reachable."""
        ...


class BaseTableStore(ABC):
    """Abstract base class for table store implementations."""

    store_name: str = 'table-store'

    @abstractmethod
    def get_values(self, table_name: str) -> list[list[Any]] | None:
        """Return all rows of a table, header included, or None if the table does not exist."""

    @abstractmethod
    def create_table(self, table_name: str, header: Sequence[str]) -> None:
        """Create a table whose first row is ``header``."""

    @abstractmethod
    def append_row(self, table_name: str, row: Sequence[Any]) -> None:
        """Append a row after the last non-empty row."""

    @abstractmethod
    def update_cell(self, table_name: str, row_number: int, column_number: int, value: Any) -> None:
        """Overwrite a single cell."""

    @abstractmethod
    def delete_row(self, table_name: str, row_number: int) -> None:
        """Physically remove a row, shifting the rows below it up."""

    @abstractmethod
    def health_check(self) -> dict[str, str]:
        """Report whether the store is reachable."""


def get_dal_handler(env: StorefrontEnvVars) -> TableStore:
    """
    Factory function to get the configured table store.

    Args:
        env: Validated handler environment

    Returns:
        Table store instance
    """
    # Import here to avoid circular imports
    if env.TABLE_STORE_BACKEND == 'memory':
        from storefront.dal.memory_handler import InMemoryTableStore

        return InMemoryTableStore()

    from storefront.dal.gsheets_handler import GoogleSheetsTableStore
    from storefront.security.credentials import get_google_credentials

    credentials = get_google_credentials(
        secret_name=env.GOOGLE_CREDENTIALS_SECRET_NAME,
        credentials_file=env.GOOGLE_APPLICATION_CREDENTIALS,
    )
    return GoogleSheetsTableStore.from_credentials(credentials, spreadsheet_id=env.SPREADSHEET_ID)


__all__ = [
    'TableStore',
    'BaseTableStore',
    'get_dal_handler',
]
