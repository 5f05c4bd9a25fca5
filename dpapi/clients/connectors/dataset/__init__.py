"""Dataset API connector."""

from .client import (
    DatasetClient,
    DatasetsBatchProcessor,
    InstanceDimensionsBatchProcessor,
    InstancesBatchProcessor,
    OptionsBatchProcessor,
    VersionsBatchProcessor,
)

__all__ = [
    "DatasetClient",
    "DatasetsBatchProcessor",
    "InstanceDimensionsBatchProcessor",
    "InstancesBatchProcessor",
    "OptionsBatchProcessor",
    "VersionsBatchProcessor",
]
