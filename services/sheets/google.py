"""
Google Sheets backend.

Reads whole sheet ranges through the Sheets API v4 values endpoint and
maps rows onto OrderRecord / InventoryItem using the header row.

No caching: every lookup is one fresh read of one range.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .base import (
    DataSourceError,
    InventoryItem,
    OrderRecord,
    Quantity,
    SheetsDataSource,
    below_threshold,
    find_order,
    item_from_row,
    normalize_header,
    order_from_row,
    search_items,
)

logger = logging.getLogger(__name__)

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"


def rows_to_dicts(values: List[List[Any]]) -> List[Dict[str, Any]]:
    """
    Turn a values grid into header-keyed dicts.

    The API drops trailing empty cells, so short rows are padded with None.
    Fully blank rows are skipped.
    """
    if not values:
        return []

    headers = [normalize_header(str(h)) for h in values[0]]
    rows: List[Dict[str, Any]] = []
    for raw in values[1:]:
        if not any(str(cell).strip() for cell in raw):
            continue
        padded = list(raw) + [None] * (len(headers) - len(raw))
        rows.append({h: padded[i] for i, h in enumerate(headers) if h})
    return rows


class GoogleSheetsDataSource(SheetsDataSource):
    """
    Spreadsheet-backed data source using the Google Sheets REST API.

    Authentication is either an API key (sheet shared by link) or an
    OAuth bearer token (private sheet). Exactly one is needed.
    """

    name = "google"

    def __init__(
        self,
        spreadsheet_id: str,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        orders_range: str = "Orders",
        inventory_range: str = "Inventory",
        low_stock_threshold: Quantity = 5,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the backend.

        Args:
            spreadsheet_id: ID from the sheet URL (/d/<id>/edit)
            api_key: Google API key for link-shared sheets
            access_token: OAuth2 access token for private sheets
            orders_range: A1 range or sheet title holding orders
            inventory_range: A1 range or sheet title holding inventory
            low_stock_threshold: quantity at or below which an item is low
            timeout_s: HTTP timeout per read
            transport: Optional httpx transport (tests inject MockTransport)
        """
        self.spreadsheet_id = spreadsheet_id
        self.api_key = api_key
        self.access_token = access_token
        self.orders_range = orders_range
        self.inventory_range = inventory_range
        self.low_stock_threshold = low_stock_threshold
        self.timeout_s = timeout_s
        self._transport = transport

    def _values_url(self, sheet_range: str) -> str:
        return f"{SHEETS_API_BASE}/{self.spreadsheet_id}/values/{quote(sheet_range, safe='!:')}"

    async def _read_rows(self, sheet_range: str) -> List[Dict[str, Any]]:
        """
        Fetch one range and return its rows keyed by header.

        Raises:
            DataSourceError: on timeout, transport error, non-2xx or bad JSON
        """
        params = {"majorDimension": "ROWS"}
        headers = {}
        if self.api_key:
            params["key"] = self.api_key
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.get(
                    self._values_url(sheet_range),
                    params=params,
                    headers=headers,
                )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise DataSourceError(f"Sheets read of {sheet_range!r} timed out") from e
        except httpx.HTTPStatusError as e:
            raise DataSourceError(
                f"Sheets read of {sheet_range!r} failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise DataSourceError(f"Sheets read of {sheet_range!r} failed: {e}") from e
        except ValueError as e:
            raise DataSourceError(f"Sheets read of {sheet_range!r} returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise DataSourceError(f"Unexpected Sheets payload for {sheet_range!r}")
        values = payload.get("values", [])
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise DataSourceError(f"Unexpected Sheets values for {sheet_range!r}")

        rows = rows_to_dicts(values)
        logger.debug(f"Read {len(rows)} rows from {sheet_range!r}")
        return rows

    async def _read_inventory(self) -> List[InventoryItem]:
        return [item_from_row(row) for row in await self._read_rows(self.inventory_range)]

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        rows = await self._read_rows(self.orders_range)
        orders = [order for order in map(order_from_row, rows) if order is not None]
        return find_order(orders, order_id)

    async def find_inventory(self, query: str) -> List[InventoryItem]:
        return search_items(await self._read_inventory(), query)

    async def list_low_stock(self) -> List[InventoryItem]:
        return below_threshold(await self._read_inventory(), self.low_stock_threshold)
