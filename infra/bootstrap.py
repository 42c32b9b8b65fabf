"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the data source from configuration.
"""

from typing import Optional

from services.sheets import SheetsDataSource

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process.
    The data source itself is stateless, so sharing it across
    requests needs no locking.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.data_source = self.config.create_data_source()

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_data_source(self) -> SheetsDataSource:
        """Get spreadsheet data source."""
        return self.data_source

    def __repr__(self) -> str:
        return f"InfraBootstrap(sheets={self.config.sheets_backend})"


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap the data source.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with the data source initialized
    """
    return InfraBootstrap.get_instance(config)


def get_data_source() -> SheetsDataSource:
    """FastAPI dependency: the process-wide data source."""
    return bootstrap_infrastructure().get_data_source()
