"""Generic batching layer for paginated APIs.

This module provides reusable logic to fetch a whole paginated collection
in concurrent batches, and to apply bulk mutations in sequential chunks.

Architecture:
    The batching layer consists of:
    - definitions.py: Batch metadata structures (BatchPolicy, BatchResult, BatchJobState)
    - executors.py: Batch execution logic (concurrent fetch/process, sequential split)
    - telemetry.py: Structured logging

Usage:
    API clients supply an async batch getter, returning a BatchResult for an
    offset, and an async batch processor that aggregates each payload.
"""

from __future__ import annotations

from .definitions import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_WORKERS,
    BatchGetter,
    BatchJobState,
    BatchPolicy,
    BatchProcessor,
    BatchResult,
    ChunkProcessor,
    calculate_remaining_calls,
    split_in_chunks,
)
from .executors import BatchExecutor, process_in_batches, process_in_concurrent_batches

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_MAX_WORKERS",
    "BatchPolicy",
    "BatchResult",
    "BatchJobState",
    "BatchGetter",
    "BatchProcessor",
    "ChunkProcessor",
    "BatchExecutor",
    "calculate_remaining_calls",
    "split_in_chunks",
    "process_in_concurrent_batches",
    "process_in_batches",
]
