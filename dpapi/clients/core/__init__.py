"""Core components."""

from .exceptions import (
    APIResponseError,
    BatchAggregationError,
    BatchError,
    BatchSplitError,
    ClientError,
    ETagMismatchError,
    HeaderError,
    HeaderNotFoundError,
    HeaderValueEmptyError,
    ValidationError,
)

__all__ = [
    "ClientError",
    "APIResponseError",
    "ValidationError",
    "HeaderError",
    "HeaderNotFoundError",
    "HeaderValueEmptyError",
    "BatchError",
    "BatchAggregationError",
    "ETagMismatchError",
    "BatchSplitError",
]
