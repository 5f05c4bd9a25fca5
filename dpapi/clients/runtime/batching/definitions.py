"""Batching metadata definitions and policy structures.

This module defines the data structures shared by the batch executors:
the policy that configures a run, the result returned by a batch getter,
and the ephemeral state of one concurrent run.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 100
DEFAULT_MAX_WORKERS = 10


@dataclass(frozen=True)
class BatchPolicy:
    """Batching policy for one run.

    Attributes:
        batch_size: Number of items requested per batch (the API ``limit``)
        max_workers: Upper bound on concurrently in-flight batches
        validate_etag: Whether every batch must carry the same ETag
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS
    validate_etag: bool = False

    def __post_init__(self) -> None:
        """Validate batch policy configuration."""
        if self.batch_size < 1:
            raise ValueError("BatchPolicy batch_size must be a positive integer")
        if self.max_workers < 1:
            raise ValueError("BatchPolicy max_workers must be a positive integer")


@dataclass(frozen=True)
class BatchResult:
    """One fetched batch.

    Attributes:
        payload: The page as returned by the API client (opaque to the executor)
        total_count: Total number of items in the whole collection
        etag: Version token of the collection when this batch was served
    """

    payload: Any
    total_count: int
    etag: str = ""


# async (offset) -> BatchResult
BatchGetter = Callable[[int], Awaitable[BatchResult]]

# async (payload, etag) -> abort
BatchProcessor = Callable[[Any, str], Awaitable[bool]]

# async (chunk) -> None
ChunkProcessor = Callable[[Sequence[T]], Awaitable[Any]]


@dataclass
class BatchJobState:
    """Mutable state of a single concurrent run.

    Only touched by the executor while holding its lock (the abort check
    before fetching is a plain read).

    Attributes:
        total_count: Collection size discovered from the first batch
        etag: ETag recorded so far (first batch's when validating, else last fetched)
        error: First fatal error observed; later ones are dropped
        aborted: Set once no further batches should be started or processed
        batches_fetched: Number of successful getter calls
        batches_processed: Number of processor calls that returned
        batches_skipped: Batches not fetched, or fetched and discarded, after abort
    """

    total_count: int
    etag: str = ""
    error: BaseException | None = None
    aborted: bool = False
    batches_fetched: int = 0
    batches_processed: int = 0
    batches_skipped: int = 0

    def fail(self, err: BaseException) -> bool:
        """Record a fatal error and abort. Returns True if this error won the slot."""
        self.aborted = True
        if self.error is None:
            self.error = err
            return True
        return False

    def abort(self) -> None:
        """Stop the run without recording an error."""
        self.aborted = True


def calculate_remaining_calls(total_count: int, batch_size: int) -> int:
    """Number of batches still needed after the first one.

    The first batch already covers one full multiple of ``batch_size``, so an
    exact multiple needs one call fewer than the integer quotient.

    Args:
        total_count: Total number of items in the collection
        batch_size: Items per batch

    Returns:
        Number of additional batches (never negative)
    """
    num_calls = total_count // batch_size
    if total_count % batch_size == 0:
        num_calls -= 1
    return max(num_calls, 0)


def split_in_chunks(items: Sequence[T], batch_size: int) -> list[Sequence[T]]:
    """Split items into contiguous chunks of ``batch_size`` (the last may be shorter)."""
    if batch_size < 1:
        raise ValueError("batch_size must be a positive integer")
    return [items[i : i + batch_size] for i in range(0, len(items), batch_size)]
