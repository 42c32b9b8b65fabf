"""
Infrastructure module exports.

Configuration and bootstrap for the spreadsheet data source.
"""

from .config import InfraConfig, get_config, SheetsBackendType
from .bootstrap import InfraBootstrap, bootstrap_infrastructure, get_data_source

__all__ = [
    "InfraConfig",
    "get_config",
    "SheetsBackendType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
    "get_data_source",
]
