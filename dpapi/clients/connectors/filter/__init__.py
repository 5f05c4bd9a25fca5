"""Filter API connector."""

from .client import DimensionOptionsBatchProcessor, FilterClient

__all__ = ["FilterClient", "DimensionOptionsBatchProcessor"]
