"""
Stub sheets backend for testing and offline development.

Deterministic, in-memory, never touches the network.
"""

from typing import Iterable, List, Optional

from .base import (
    InventoryItem,
    OrderRecord,
    Quantity,
    SheetsDataSource,
    below_threshold,
    find_order,
    search_items,
)


class StubSheetsDataSource(SheetsDataSource):
    """
    In-memory Orders and Inventory sheets.

    Applies the same matching rules as the Google Sheets backend so
    replies look identical in local runs.
    """

    name = "stub"

    def __init__(
        self,
        orders: Optional[Iterable[OrderRecord]] = None,
        inventory: Optional[Iterable[InventoryItem]] = None,
        low_stock_threshold: Quantity = 5,
    ):
        self.orders: List[OrderRecord] = list(orders or [])
        self.inventory: List[InventoryItem] = list(inventory or [])
        self.low_stock_threshold = low_stock_threshold

    async def get_order(self, order_id: str) -> Optional[OrderRecord]:
        return find_order(self.orders, order_id)

    async def find_inventory(self, query: str) -> List[InventoryItem]:
        return search_items(self.inventory, query)

    async def list_low_stock(self) -> List[InventoryItem]:
        return below_threshold(self.inventory, self.low_stock_threshold)


def demo_data_source(low_stock_threshold: Quantity = 5) -> StubSheetsDataSource:
    """Small fixed dataset used when SHEETS_BACKEND=stub."""
    return StubSheetsDataSource(
        orders=[
            OrderRecord(order_id="1001", customer_name="Acme Ltd", status="Shipped", eta="Tomorrow"),
            OrderRecord(order_id="1002", status="Processing"),
        ],
        inventory=[
            InventoryItem(name="Widget", sku="WID-1", quantity=42, location="Aisle 3"),
            InventoryItem(name="Gadget", sku="GAD-7", quantity=2, location="Aisle 1"),
            InventoryItem(sku="BOLT-M6", quantity=0),
        ],
        low_stock_threshold=low_stock_threshold,
    )
