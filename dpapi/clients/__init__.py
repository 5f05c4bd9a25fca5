"""dpapi clients - async API clients with a concurrent batch-processing engine."""

from .connectors import DatasetClient, FilterClient
from .core import (
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
from .core.headers import IF_MATCH_ANY, RequestAuth
from .runtime.batching import (
    BatchExecutor,
    BatchPolicy,
    BatchResult,
    process_in_batches,
    process_in_concurrent_batches,
)
from .runtime.rest import HTTPClient, RESTResponse

__version__ = "0.1.0"

__all__ = [
    # Batching
    "BatchExecutor",
    "BatchPolicy",
    "BatchResult",
    "process_in_concurrent_batches",
    "process_in_batches",
    # Transport
    "HTTPClient",
    "RESTResponse",
    "RequestAuth",
    "IF_MATCH_ANY",
    # Connectors
    "DatasetClient",
    "FilterClient",
    # Exceptions
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
