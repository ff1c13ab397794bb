"""
Google Sheets implementation of the table store.

Each table is a worksheet (tab) of one spreadsheet document. Values are read
unformatted so numeric cells come back as numbers, and written raw so phone
numbers and pin codes keep their leading zeros.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

import gspread
from google.auth.credentials import Credentials
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException, WorksheetNotFound
from gspread.utils import ValueInputOption, ValueRenderOption, rowcol_to_a1
from requests.exceptions import RequestException

from storefront.dal import BaseTableStore
from storefront.handlers.utils.errors import StoreUnavailableError
from storefront.handlers.utils.observability import logger, tracer

# Size of a freshly inserted worksheet; Sheets grows the grid on append
NEW_SHEET_ROWS = 1000


class GoogleSheetsTableStore(BaseTableStore):
    """Table store backed by the worksheets of a Google Sheets document."""

    store_name = 'gsheets'

    def __init__(self, client: gspread.Client, spreadsheet_id: str) -> None:
        """
        Initialize the Google Sheets store.

        Args:
            client: Authorized gspread client
            spreadsheet_id: Document key of the spreadsheet
        """
        self.client = client
        self.spreadsheet_id = spreadsheet_id
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._worksheets: Dict[str, gspread.Worksheet] = {}
        logger.debug(f'Google Sheets store initialized for document: {spreadsheet_id}')

    @classmethod
    def from_credentials(cls, credentials: Credentials, spreadsheet_id: str) -> 'GoogleSheetsTableStore':
        """Authorize a gspread client with service account credentials."""
        return cls(gspread.authorize(credentials), spreadsheet_id)

    @tracer.capture_method
    def get_values(self, table_name: str) -> Optional[List[List[Any]]]:
        with self._store_errors('read', table_name):
            try:
                worksheet = self._worksheet(table_name)
            except WorksheetNotFound:
                logger.info(f'Worksheet not found: {table_name}')
                return None
            return worksheet.get_all_values(value_render_option=ValueRenderOption.unformatted)

    @tracer.capture_method
    def create_table(self, table_name: str, header: Sequence[str]) -> None:
        with self._store_errors('create', table_name):
            try:
                worksheet = self._worksheet(table_name)
            except WorksheetNotFound:
                worksheet = self._open().add_worksheet(title=table_name, rows=NEW_SHEET_ROWS, cols=len(header))
                self._worksheets[table_name] = worksheet
                logger.info(f'Created worksheet: {table_name}')
            worksheet.update(
                values=[list(header)],
                range_name=rowcol_to_a1(1, 1),
                value_input_option=ValueInputOption.raw,
            )

    @tracer.capture_method
    def append_row(self, table_name: str, row: Sequence[Any]) -> None:
        with self._store_errors('append', table_name):
            self._worksheet(table_name).append_row(list(row), value_input_option=ValueInputOption.raw)

    @tracer.capture_method
    def update_cell(self, table_name: str, row_number: int, column_number: int, value: Any) -> None:
        with self._store_errors('update', table_name):
            self._worksheet(table_name).update(
                values=[[value]],
                range_name=rowcol_to_a1(row_number, column_number),
                value_input_option=ValueInputOption.raw,
            )

    @tracer.capture_method
    def delete_row(self, table_name: str, row_number: int) -> None:
        with self._store_errors('delete', table_name):
            self._worksheet(table_name).delete_rows(row_number)

    @tracer.capture_method
    def health_check(self) -> Dict[str, str]:
        try:
            titles = [worksheet.title for worksheet in self._open().worksheets()]
            logger.debug('Google Sheets health check passed')
            return {
                'status': 'healthy',
                'store': self.store_name,
                'spreadsheet': self.spreadsheet_id,
                'tables': ','.join(titles),
                'timestamp': datetime.now(timezone.utc).isoformat(),
            }
        except (GSpreadException, GoogleAuthError, RequestException) as e:
            logger.error(f'Google Sheets health check failed: {e}')
            return {
                'status': 'unhealthy',
                'store': self.store_name,
                'spreadsheet': self.spreadsheet_id,
                'error': str(e),
                'timestamp': datetime.now(timezone.utc).isoformat(),
            }

    def _open(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            self._spreadsheet = self.client.open_by_key(self.spreadsheet_id)
        return self._spreadsheet

    def _worksheet(self, table_name: str) -> gspread.Worksheet:
        worksheet = self._worksheets.get(table_name)
        if worksheet is None:
            worksheet = self._open().worksheet(table_name)
            self._worksheets[table_name] = worksheet
        return worksheet

    @contextmanager
    def _store_errors(self, operation: str, table_name: str) -> Iterator[None]:
        try:
            yield
        except (GSpreadException, GoogleAuthError, RequestException) as e:
            logger.error(f'Google Sheets error during {operation} on {table_name}: {e}', extra={
                'spreadsheet': self.spreadsheet_id,
                'error_type': type(e).__name__,
            })
            # a cached handle may point at a deleted worksheet
            self._worksheets.pop(table_name, None)
            raise StoreUnavailableError(
                message=f'Spreadsheet unavailable: {e}',
                store_name=self.store_name,
            ) from e
