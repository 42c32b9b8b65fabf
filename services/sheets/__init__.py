"""
Spreadsheet data source exports.

Clean interface for the responder to import sheet components.
"""

from .base import (
    DataSourceError,
    InventoryItem,
    OrderRecord,
    SheetsDataSource,
)
from .google import GoogleSheetsDataSource
from .stub import StubSheetsDataSource, demo_data_source

__all__ = [
    "DataSourceError",
    "InventoryItem",
    "OrderRecord",
    "SheetsDataSource",
    "GoogleSheetsDataSource",
    "StubSheetsDataSource",
    "demo_data_source",
]
