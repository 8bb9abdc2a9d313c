"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is used as the document store because:
1. The stall owner can open the ledger directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)
4. Easy to export/migrate later

TRADEOFFS:
- Not suitable for high-volume data (one stall is fine)
- No transactions (every ledger operation touches a single row)
- Limited query capabilities (we filter in Python)

Row order in the sheet is insertion order, which is what breaks ties
between entries with the same timestamp.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from warung_ledger.config import get_settings
from warung_ledger.models.audit import AuditEvent
from warung_ledger.models.transaction import (
    TransactionFilter,
    TransactionKind,
    TransactionRecord,
)
from warung_ledger.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    StorageError,
    TransactionStorageInterface,
)


# Column mappings for Transactions sheet
TRANSACTION_COLUMNS = [
    "id",
    "kind",
    "item",
    "amount",
    "quantity",
    "occurred_at",
    "owner_id",
    "note",
]

# Column mappings for Audit sheet
AUDIT_COLUMNS = [
    "event_id",
    "timestamp",
    "event_type",
    "severity",
    "owner_id",
    "entity_type",
    "entity_id",
    "correlation_id",
    "description",
    "details_json",
    "error_message",
    "is_user_action",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create_sheet(
        self,
        title: str,
        columns: list[str],
        rows: int,
    ) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=rows,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet

    def get_transactions_sheet(self) -> gspread.Worksheet:
        """Get or create the Transactions worksheet."""
        return self._get_or_create_sheet(
            self._settings.transactions_sheet_name,
            TRANSACTION_COLUMNS,
            rows=1000,
        )

    def get_audit_sheet(self) -> gspread.Worksheet:
        """Get or create the Audit worksheet."""
        return self._get_or_create_sheet(
            self._settings.audit_sheet_name,
            AUDIT_COLUMNS,
            rows=5000,  # More rows for audit log
        )


def record_to_row(record: TransactionRecord) -> list:
    """Convert a TransactionRecord to a spreadsheet row."""
    return [
        str(record.id) if record.id else "",
        record.kind.value,
        record.item,
        record.amount,
        record.quantity,
        record.occurred_at.isoformat(),
        record.owner_id,
        record.note,
    ]


def row_to_record(row: list) -> TransactionRecord:
    """Convert a spreadsheet row to a TransactionRecord."""
    def safe_get(index: int, default: str = "") -> str:
        try:
            return str(row[index]) if row[index] != "" else default
        except IndexError:
            return default

    return TransactionRecord(
        id=UUID(safe_get(0)),
        kind=TransactionKind(safe_get(1)),
        item=safe_get(2),
        amount=int(safe_get(3)),
        quantity=int(safe_get(4, "1")),
        occurred_at=datetime.fromisoformat(safe_get(5)),
        owner_id=safe_get(6),
        note=safe_get(7),
    )


class GoogleSheetsTransactionStorage(TransactionStorageInterface):
    """
    Google Sheets implementation of transaction storage.

    One record per row. Reads pull the whole sheet and filter in Python.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _load(self, filter: TransactionFilter) -> list[TransactionRecord]:
        """Read all rows matching a filter, oldest first."""
        sheet = self._client.get_transactions_sheet()
        all_rows = sheet.get_all_values()[1:]  # Skip header

        records = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue
            # Cheap owner check before parsing the row
            if len(row) > 6 and row[6] != filter.owner_id:
                continue

            try:
                record = row_to_record(row)
            except (ValueError, IndexError):
                continue  # Skip malformed rows

            if filter.matches(record):
                records.append(record)

        # Stable sort keeps sheet order for equal timestamps
        records.sort(key=lambda r: r.occurred_at)
        return records

    async def insert(self, record: TransactionRecord) -> UUID:
        """
        Append a record to the Transactions sheet.

        Not retried: append_row can fail after the row was written, and a
        second attempt would store the entry twice.
        """
        transaction_id = uuid4()
        try:
            sheet = self._client.get_transactions_sheet()
            row = record_to_row(record.model_copy(update={"id": transaction_id}))
            sheet.append_row(row, value_input_option="RAW")
            return transaction_id
        except Exception as e:
            raise StorageError(f"Failed to save transaction: {e}")

    async def find_many(
        self,
        filter: TransactionFilter,
        descending: bool = False,
    ) -> list[TransactionRecord]:
        try:
            records = self._load(filter)
        except Exception as e:
            raise StorageError(f"Failed to list transactions: {e}")

        if descending:
            records.reverse()
        return records

    async def find_one(
        self,
        filter: TransactionFilter,
    ) -> Optional[TransactionRecord]:
        try:
            records = self._load(filter)
        except Exception as e:
            raise StorageError(f"Failed to find transaction: {e}")

        return records[-1] if records else None

    async def delete_by_id(self, transaction_id: UUID) -> bool:
        """Delete a record's row by ID."""
        try:
            sheet = self._client.get_transactions_sheet()
            all_rows = sheet.get_all_values()

            for idx, row in enumerate(all_rows[1:], start=2):  # Row 1 is header
                if row and row[0] == str(transaction_id):
                    sheet.delete_rows(idx)
                    return True

            return False
        except Exception as e:
            raise StorageError(f"Failed to delete transaction: {e}")


class GoogleSheetsAuditStorage(AuditStorageInterface):
    """
    Google Sheets implementation of audit log storage.

    Audit events are append-only.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            sheet = self._client.get_audit_sheet()
            sheet.append_row(event.to_sheets_row(), value_input_option="RAW")
            return True
        except Exception as e:
            raise StorageError(f"Failed to write audit event: {e}")
