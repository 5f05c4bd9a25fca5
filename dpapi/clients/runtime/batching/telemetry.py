"""Structured logging for batching operations.

This module provides telemetry hooks for the batch executors, emitting
structured log records through the standard logging module.
"""

from __future__ import annotations

import logging

from .definitions import BatchJobState

logger = logging.getLogger(__name__)


def log_batch_plan(
    *,
    total_count: int,
    batch_size: int,
    max_workers: int,
    remaining_calls: int,
    validate_etag: bool,
) -> None:
    """Log the batch plan derived from the first batch.

    Args:
        total_count: Collection size reported by the first batch
        batch_size: Items per batch
        max_workers: Concurrency bound
        remaining_calls: Batches to fetch after the first one
        validate_etag: Whether ETag validation is enabled
    """
    logger.info(
        "batch_plan_created",
        extra={
            "total_count": total_count,
            "batch_size": batch_size,
            "max_workers": max_workers,
            "remaining_calls": remaining_calls,
            "validate_etag": validate_etag,
        },
    )


def log_batch_processed(*, offset: int, etag: str, latency_ms: float | None = None) -> None:
    """Log a successfully processed batch.

    Args:
        offset: Offset of the batch
        etag: ETag the batch was fetched with
        latency_ms: Fetch and process latency in milliseconds (optional)
    """
    logger.debug(
        "batch_processed",
        extra={"offset": offset, "etag": etag, "latency_ms": latency_ms},
    )


def log_batch_error(*, offset: int, error: BaseException, first: bool) -> None:
    """Log a batch failure.

    Args:
        offset: Offset of the failing batch
        error: The exception raised by the getter or the processor
        first: Whether this error is the one that will be propagated
    """
    logger.error(
        "batch_error",
        extra={
            "offset": offset,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "propagated": first,
        },
    )


def log_batch_aborted(*, offset: int) -> None:
    """Log an abort requested by the batch processor.

    Args:
        offset: Offset of the batch whose processing requested the abort
    """
    logger.info("batch_aborted", extra={"offset": offset})


def log_etag_mismatch(*, offset: int, expected: str, actual: str) -> None:
    """Log a batch whose ETag differs from the first batch.

    Args:
        offset: Offset of the mismatching batch
        expected: ETag of the first batch
        actual: ETag of the mismatching batch
    """
    logger.warning(
        "batch_etag_mismatch",
        extra={"offset": offset, "expected_etag": expected, "actual_etag": actual},
    )


def log_batch_execution_complete(
    *,
    state: BatchJobState,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a concurrent run.

    Args:
        state: Final job state
        total_latency_ms: Total latency in milliseconds (optional)
    """
    logger.info(
        "batch_execution_complete",
        extra={
            "total_count": state.total_count,
            "batches_fetched": state.batches_fetched,
            "batches_processed": state.batches_processed,
            "batches_skipped": state.batches_skipped,
            "aborted": state.aborted,
            "failed": state.error is not None,
            "etag": state.etag,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_batch_split_complete(*, num_items: int, batch_size: int, processed_batches: int) -> None:
    """Log completion of a sequential run.

    Args:
        num_items: Number of values split into chunks
        batch_size: Maximum chunk size
        processed_batches: Number of chunks processed
    """
    logger.info(
        "batch_split_complete",
        extra={
            "num_items": num_items,
            "batch_size": batch_size,
            "processed_batches": processed_batches,
        },
    )
