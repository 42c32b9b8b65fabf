"""
Intent Handlers

One read against the data source per call, then plain-text formatting.

Rules:
- Data-source failures never propagate to the caller
- Each lookup returns a HandlerResult (ok | collaborator_failure)
- Failures map to a fixed apology per handler at render time
- Missing record fields are left out, never rendered as blanks
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from services.sheets import DataSourceError, InventoryItem, OrderRecord, SheetsDataSource

from .replies import (
    INVENTORY_UNAVAILABLE,
    LOW_STOCK_HEADER,
    NO_LOW_STOCK_MESSAGE,
    ORDERS_UNAVAILABLE,
)

logger = logging.getLogger(__name__)

MAX_INVENTORY_MATCHES = 5
MAX_LOW_STOCK_ITEMS = 10
UNKNOWN_ITEM = "Unknown Item"

HandlerStatus = Literal["ok", "collaborator_failure"]


@dataclass(frozen=True)
class HandlerResult:
    """
    Outcome of one handler call.

    Invariants:
    - status == "ok" implies text is set
    - status == "collaborator_failure" implies error is set
    """

    status: HandlerStatus
    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, text: str) -> "HandlerResult":
        return cls(status="ok", text=text)

    @classmethod
    def failure(cls, error: str) -> "HandlerResult":
        return cls(status="collaborator_failure", error=error)

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    def render(self, apology: str) -> str:
        """Reply text, with the apology standing in for a failure."""
        return self.text if self.succeeded else apology


def _log_failure(action: str, error: Exception) -> HandlerResult:
    if isinstance(error, DataSourceError):
        logger.error(f"{action} failed: {error}", exc_info=error)
    else:
        logger.error(f"Unexpected error during {action.lower()}: {error}", exc_info=error)
    return HandlerResult.failure(str(error) or type(error).__name__)


def _quantity(item: InventoryItem):
    return "?" if item.quantity is None else item.quantity


# ============================================================================
# FORMATTING
# ============================================================================

def format_order(record: OrderRecord) -> str:
    lines = [
        f"Order {record.order_id}",
        f"Customer: {record.customer_name}" if record.customer_name else "",
        f"Status: {record.status}" if record.status else "",
        f"ETA: {record.eta}" if record.eta else "",
    ]
    return "\n".join(line for line in lines if line)


def format_inventory_item(item: InventoryItem) -> str:
    """Identity, quantity and (optionally) location, one per line."""
    if item.name:
        identity = f"{item.name} ({item.sku or 'N/A'})"
    else:
        identity = item.sku or UNKNOWN_ITEM

    lines = [identity, f"Qty: {_quantity(item)}"]
    if item.location:
        lines.append(f"Location: {item.location}")
    return "\n".join(lines)


def format_inventory(items: Sequence[InventoryItem]) -> str:
    return "\n\n".join(format_inventory_item(item) for item in items[:MAX_INVENTORY_MATCHES])


def format_low_stock_line(item: InventoryItem) -> str:
    label = item.name or item.sku or UNKNOWN_ITEM
    location = f" ({item.location})" if item.location else ""
    return f"{label} — Qty: {_quantity(item)}{location}"


def format_low_stock(items: Sequence[InventoryItem]) -> str:
    lines = [format_low_stock_line(item) for item in items[:MAX_LOW_STOCK_ITEMS]]
    return f"{LOW_STOCK_HEADER}\n\n" + "\n".join(lines)


# ============================================================================
# LOOKUPS (tagged results)
# ============================================================================

async def lookup_order(argument: str, data_source: SheetsDataSource) -> HandlerResult:
    try:
        record = await data_source.get_order(argument)
    except Exception as e:
        return _log_failure("Order lookup", e)

    if record is None:
        return HandlerResult.ok(f"No order found for {argument}.")
    return HandlerResult.ok(format_order(record))


async def lookup_inventory(argument: str, data_source: SheetsDataSource) -> HandlerResult:
    try:
        matches = await data_source.find_inventory(argument)
    except Exception as e:
        return _log_failure("Inventory lookup", e)

    if not matches:
        return HandlerResult.ok(f'No inventory records match "{argument}".')
    return HandlerResult.ok(format_inventory(list(matches)))


async def lookup_low_stock(data_source: SheetsDataSource) -> HandlerResult:
    try:
        items = await data_source.list_low_stock()
    except Exception as e:
        return _log_failure("Low stock listing", e)

    if not items:
        return HandlerResult.ok(NO_LOW_STOCK_MESSAGE)
    return HandlerResult.ok(format_low_stock(list(items)))


# ============================================================================
# HANDLERS (plain text, never raise)
# ============================================================================

async def handle_order(argument: str, data_source: SheetsDataSource) -> str:
    """Order status reply for one order id."""
    result = await lookup_order(argument, data_source)
    return result.render(ORDERS_UNAVAILABLE)


async def handle_inventory(argument: str, data_source: SheetsDataSource) -> str:
    """Stock levels for up to five matching items."""
    result = await lookup_inventory(argument, data_source)
    return result.render(INVENTORY_UNAVAILABLE)


async def handle_low_stock(data_source: SheetsDataSource) -> str:
    """Up to ten items the data source reports as low."""
    result = await lookup_low_stock(data_source)
    return result.render(INVENTORY_UNAVAILABLE)
