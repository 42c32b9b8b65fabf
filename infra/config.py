"""
Infrastructure configuration system.

Environment-based data source selection with sensible defaults.
"""

import os
from dataclasses import dataclass
from typing import Literal, Optional

from services.sheets import GoogleSheetsDataSource, SheetsDataSource, demo_data_source


SheetsBackendType = Literal["google", "stub"]


def _parse_threshold(raw: str) -> float:
    value = float(raw)
    return int(value) if value.is_integer() else value


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    sheets_backend: SheetsBackendType
    spreadsheet_id: str
    api_key: Optional[str]
    access_token: Optional[str]
    orders_range: str
    inventory_range: str
    low_stock_threshold: float
    timeout_s: float

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - backend: google (SHEETS_BACKEND=stub for local demo data)
        - sheets: "Orders" and "Inventory" tabs
        - low stock: quantity <= 5
        """
        return cls(
            sheets_backend=os.getenv("SHEETS_BACKEND", "google").lower(),  # type: ignore
            spreadsheet_id=os.getenv("GOOGLE_SHEETS_ID", ""),
            api_key=os.getenv("GOOGLE_SHEETS_API_KEY") or None,
            access_token=os.getenv("GOOGLE_SHEETS_ACCESS_TOKEN") or None,
            orders_range=os.getenv("ORDERS_SHEET_RANGE", "Orders"),
            inventory_range=os.getenv("INVENTORY_SHEET_RANGE", "Inventory"),
            low_stock_threshold=_parse_threshold(os.getenv("LOW_STOCK_THRESHOLD", "5")),
            timeout_s=float(os.getenv("SHEETS_TIMEOUT_S", "10")),
        )

    def missing_settings(self) -> list[str]:
        """Names of required environment variables that are not set."""
        if self.sheets_backend == "stub":
            return []
        missing = []
        if not self.spreadsheet_id:
            missing.append("GOOGLE_SHEETS_ID")
        if not (self.api_key or self.access_token):
            missing.append("GOOGLE_SHEETS_API_KEY or GOOGLE_SHEETS_ACCESS_TOKEN")
        return missing

    def create_data_source(self) -> SheetsDataSource:
        """Create data source instance based on configuration."""
        if self.sheets_backend == "stub":
            return demo_data_source(self.low_stock_threshold)

        # Default to google
        return GoogleSheetsDataSource(
            spreadsheet_id=self.spreadsheet_id,
            api_key=self.api_key,
            access_token=self.access_token,
            orders_range=self.orders_range,
            inventory_range=self.inventory_range,
            low_stock_threshold=self.low_stock_threshold,
            timeout_s=self.timeout_s,
        )


def get_config() -> InfraConfig:
    """Get infrastructure configuration."""
    return InfraConfig.from_env()
