"""Service connectors (one client per backend API)."""

from .aggregation import OffsetAggregator
from .base import BaseClient
from .dataset import DatasetClient
from .filter import FilterClient

__all__ = [
    "BaseClient",
    "OffsetAggregator",
    "DatasetClient",
    "FilterClient",
]
