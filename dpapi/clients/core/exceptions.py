"""Custom exception hierarchy."""

from __future__ import annotations


class ClientError(Exception):
    """Base exception for all library errors."""

    pass


class APIResponseError(ClientError):
    """Unexpected status code returned by a backend API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        expected_status: int | None = None,
        uri: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.expected_status = expected_status
        self.uri = uri

    @classmethod
    def from_status(cls, service: str, expected: int, actual: int, uri: str) -> APIResponseError:
        """Build the error reported when `actual` was received instead of `expected`."""
        return cls(
            f"invalid response from {service} - should be: {expected}, got: {actual}, path: {uri}",
            status_code=actual,
            expected_status=expected,
            uri=uri,
        )


class ValidationError(ClientError):
    """Request parameter validation failure."""

    pass


class HeaderError(ClientError):
    """Base class for header get/set failures."""

    pass


class HeaderNotFoundError(HeaderError):
    """Requested header is not present."""

    def __init__(self, header: str) -> None:
        super().__init__(f"header not found: {header}")
        self.header = header


class HeaderValueEmptyError(HeaderError):
    """An empty value was passed where a non-empty header value is required."""

    def __init__(self, header: str) -> None:
        super().__init__(f"header {header} not set as value was empty")
        self.header = header


class BatchError(ClientError):
    """Base class for batch processing failures."""

    pass


class ETagMismatchError(BatchError):
    """ETag changed between two batches of the same collection.

    The collection was modified while it was being fetched, so the
    aggregated result would be inconsistent.
    """

    def __init__(self, expected: str, actual: str, offset: int | None = None) -> None:
        super().__init__("ETag mismatch between batches")
        self.expected = expected
        self.actual = actual
        self.offset = offset


class BatchSplitError(BatchError):
    """A chunk failed during sequential batch processing.

    `processed_batches` is the number of chunks that completed before the
    failing one. The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, processed_batches: int) -> None:
        super().__init__(message)
        self.processed_batches = processed_batches


class BatchAggregationError(BatchError):
    """Batches do not fit the collection announced by the first batch.

    Raised when an item falls outside the announced total, or when the
    aggregated result is read with positions no batch filled.
    """

    pass
