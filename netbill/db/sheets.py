"""
Range I/O for the spreadsheet that backs every table.

Each logical table is a sheet whose first row is the header. The stores here
only move raw rows; turning rows into records is the job of ``db.tables``.
Nothing is cached and nothing is retried: every call goes to the backend.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import copy
import logging

import google.auth.exceptions
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from starlette.concurrency import run_in_threadpool

from netbill.core.errors import RemoteUnavailable

logger = logging.getLogger(__name__)

Row = List[Any]

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class RangeStore(ABC):
    @abstractmethod
    async def fetch_range(self, table_name: str) -> List[List[str]]:
        """All rows of the range, header first. Empty list when the range is empty."""

    @abstractmethod
    async def append_rows(self, table_name: str, rows: List[Row]) -> None:
        """Append rows after the current content without reading it."""

    @abstractmethod
    async def overwrite_range(self, table_name: str, rows: List[Row]) -> None:
        """Replace the whole range with ``rows``; ``rows[0]`` is the header."""

    @abstractmethod
    async def clear_range(self, table_name: str) -> None:
        """Remove all content, header included."""


def column_letter(index: int) -> str:
    """A1 column name for a 1-based column index: 1 -> A, 27 -> AA."""
    letters = ""
    while index > 0:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class InMemoryRangeStore(RangeStore):
    """
    Dict-backed store used for local runs and tests.
    Cells are stored as text and trailing empty cells are dropped on fetch,
    which is what the Sheets values API returns for ragged rows.
    """

    def __init__(self, tables: Optional[Dict[str, List[Row]]] = None):
        self._tables: Dict[str, List[List[str]]] = {}
        for name, rows in (tables or {}).items():
            self._tables[name] = [[_cell(v) for v in row] for row in rows]

    def rows(self, table_name: str) -> List[List[str]]:
        """Raw stored rows, untrimmed. For inspection only."""
        return copy.deepcopy(self._tables.get(table_name, []))

    async def fetch_range(self, table_name: str) -> List[List[str]]:
        result = []
        for row in self._tables.get(table_name, []):
            trimmed = list(row)
            while trimmed and trimmed[-1] == "":
                trimmed.pop()
            result.append(trimmed)
        return result

    async def append_rows(self, table_name: str, rows: List[Row]) -> None:
        self._tables.setdefault(table_name, []).extend([_cell(v) for v in row] for row in rows)

    async def overwrite_range(self, table_name: str, rows: List[Row]) -> None:
        self._tables[table_name] = [[_cell(v) for v in row] for row in rows]

    async def clear_range(self, table_name: str) -> None:
        self._tables[table_name] = []


class GoogleSheetsRangeStore(RangeStore):
    """
    Sheets API v4 backed store authenticated with a service account.

    The client library is blocking, so each request runs in Starlette's
    threadpool and only suspends the request that issued it.
    """

    def __init__(self, spreadsheet_id: str, service_account_email: str, private_key: str,
                 service: Any = None):
        self.spreadsheet_id = spreadsheet_id
        self._service_account_email = service_account_email
        # keys pasted into env files usually carry literal "\n"
        self._private_key = private_key.replace("\\n", "\n")
        self._service = service

    def _values(self):
        if self._service is None:
            credentials = service_account.Credentials.from_service_account_info(
                {
                    "client_email": self._service_account_email,
                    "private_key": self._private_key,
                    "token_uri": TOKEN_URI,
                },
                scopes=SCOPES,
            )
            self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return self._service.spreadsheets().values()

    async def _execute(self, table_name: str, operation: str, make_request) -> Dict[str, Any]:
        def call():
            return make_request(self._values()).execute()

        try:
            return await run_in_threadpool(call)
        except (HttpError, google.auth.exceptions.GoogleAuthError, OSError, ValueError) as e:
            logger.error(f"Sheets {operation} failed for '{table_name}': {e}")
            raise RemoteUnavailable(table_name, operation, e) from e

    async def fetch_range(self, table_name: str) -> List[List[str]]:
        response = await self._execute(
            table_name, "fetch",
            lambda values: values.get(spreadsheetId=self.spreadsheet_id, range=table_name),
        )
        return response.get("values", [])

    async def append_rows(self, table_name: str, rows: List[Row]) -> None:
        await self._execute(
            table_name, "append",
            lambda values: values.append(
                spreadsheetId=self.spreadsheet_id,
                range=table_name,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": rows},
            ),
        )

    async def overwrite_range(self, table_name: str, rows: List[Row]) -> None:
        # Write the new block first, then blank out whatever is left below it
        # and to the right of it. A failure between the two calls leaves stale
        # cells, never a wiped sheet.
        await self._execute(
            table_name, "overwrite",
            lambda values: values.update(
                spreadsheetId=self.spreadsheet_id,
                range=table_name,
                valueInputOption="RAW",
                body={"values": rows},
            ),
        )
        width = max((len(row) for row in rows), default=0)
        leftovers = [
            f"{table_name}!A{len(rows) + 1}:ZZZ",
            f"{table_name}!{column_letter(width + 1)}1:ZZZ",
        ]
        await self._execute(
            table_name, "overwrite",
            lambda values: values.batchClear(spreadsheetId=self.spreadsheet_id, body={"ranges": leftovers}),
        )

    async def clear_range(self, table_name: str) -> None:
        await self._execute(
            table_name, "clear",
            lambda values: values.clear(spreadsheetId=self.spreadsheet_id, range=table_name, body={}),
        )
