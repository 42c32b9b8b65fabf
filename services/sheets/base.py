"""
Spreadsheet data source abstract interface.

Role: read-only lookups against the Orders and Inventory sheets.

Rules:
- One request per call (no retries, no caching)
- Low-stock filtering is the data source's job, not the caller's
- Every failure surfaces as DataSourceError
- Record fields that are missing in the sheet stay None
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


Quantity = Union[int, float]


class DataSourceError(Exception):
    """The spreadsheet backend could not be reached or returned garbage."""
    pass


@dataclass(frozen=True)
class OrderRecord:
    """One row of the Orders sheet."""

    order_id: str
    customer_name: Optional[str] = None
    status: Optional[str] = None
    eta: Optional[str] = None


@dataclass(frozen=True)
class InventoryItem:
    """One row of the Inventory sheet."""

    name: Optional[str] = None
    sku: Optional[str] = None
    quantity: Optional[Quantity] = None
    location: Optional[str] = None


def normalize_header(header: str) -> str:
    """'Order ID' -> 'order_id', 'Customer-Name' -> 'customer_name'."""
    return header.strip().lower().replace(" ", "_").replace("-", "_")


def clean_cell(value: Any) -> Optional[str]:
    """Stringify and trim a cell; empty cells become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_quantity(value: Any) -> Optional[Quantity]:
    """
    Parse a quantity cell.

    Integral values come back as int, others as float.
    Empty or non-numeric cells give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if float(value).is_integer() else value

    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number:  # NaN
        return None
    return int(number) if number.is_integer() else number


def order_from_row(row: Dict[str, Any]) -> Optional[OrderRecord]:
    """Build an OrderRecord from a header-keyed row, None if it has no id."""
    order_id = clean_cell(row.get("order_id"))
    if order_id is None:
        return None
    return OrderRecord(
        order_id=order_id,
        customer_name=clean_cell(row.get("customer_name")),
        status=clean_cell(row.get("status")),
        eta=clean_cell(row.get("eta")),
    )


def item_from_row(row: Dict[str, Any]) -> InventoryItem:
    """Build an InventoryItem from a header-keyed row."""
    return InventoryItem(
        name=clean_cell(row.get("name")),
        sku=clean_cell(row.get("sku")),
        quantity=parse_quantity(row.get("quantity")),
        location=clean_cell(row.get("location")),
    )


def find_order(orders: List[OrderRecord], order_id: str) -> Optional[OrderRecord]:
    """First order whose id matches, trimmed and case-insensitive."""
    wanted = order_id.strip().lower()
    for order in orders:
        if order.order_id.strip().lower() == wanted:
            return order
    return None


def search_items(items: List[InventoryItem], query: str) -> List[InventoryItem]:
    """
    Match items by sku or name.

    Exact sku matches come first, then substring matches on sku or name,
    each group in sheet order.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    exact: List[InventoryItem] = []
    partial: List[InventoryItem] = []
    for item in items:
        sku = (item.sku or "").lower()
        name = (item.name or "").lower()
        if sku == needle:
            exact.append(item)
        elif needle in sku or needle in name:
            partial.append(item)
    return exact + partial


def below_threshold(items: List[InventoryItem], threshold: Quantity) -> List[InventoryItem]:
    """Items whose quantity is known and at or below the threshold."""
    return [
        item for item in items
        if item.quantity is not None and item.quantity <= threshold
    ]


class SheetsDataSource(ABC):
    """
    Abstract spreadsheet boundary.
    Responder code must depend ONLY on this interface.
    """

    name: str = "abstract"

    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """
        Look up one order by id.

        Returns:
            The matching OrderRecord, or None if no row matches

        Raises:
            DataSourceError: backend unavailable
        """
        raise NotImplementedError

    @abstractmethod
    async def find_inventory(self, query: str) -> List[InventoryItem]:
        """
        Free-text inventory search over sku and name.

        Raises:
            DataSourceError: backend unavailable
        """
        raise NotImplementedError

    @abstractmethod
    async def list_low_stock(self) -> List[InventoryItem]:
        """
        Items at or below the configured low-stock threshold.

        Raises:
            DataSourceError: backend unavailable
        """
        raise NotImplementedError
