"""Batch execution logic for fetching and processing paginated collections.

This module provides the BatchExecutor class, which drives two strategies:

- ``run_concurrent``: fetch the first batch to discover the collection size,
  then fetch the remaining batches concurrently (bounded by
  ``max_workers``) and hand each one to a processor, one at a time.
- ``run_sequential``: split a flat list into chunks and await a mutation
  callback for each chunk strictly in order.

Module-level ``process_in_concurrent_batches`` and ``process_in_batches``
are shortcuts that build the policy from plain arguments.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from time import perf_counter
from typing import Any

from ...core.exceptions import BatchSplitError, ETagMismatchError
from .definitions import (
    BatchGetter,
    BatchJobState,
    BatchPolicy,
    BatchProcessor,
    ChunkProcessor,
    calculate_remaining_calls,
    split_in_chunks,
)
from .telemetry import (
    log_batch_aborted,
    log_batch_error,
    log_batch_execution_complete,
    log_batch_plan,
    log_batch_processed,
    log_batch_split_complete,
    log_etag_mismatch,
)


class BatchExecutor:
    """Executes batched fetch/process runs according to a BatchPolicy."""

    def __init__(self, policy: BatchPolicy | None = None) -> None:
        """Initialize batch executor.

        Args:
            policy: Batching policy (defaults to BatchPolicy())
        """
        self._policy = policy or BatchPolicy()

    @property
    def policy(self) -> BatchPolicy:
        """Get the batching policy."""
        return self._policy

    async def run_concurrent(
        self,
        *,
        get_batch: BatchGetter,
        process_batch: BatchProcessor,
    ) -> str:
        """Fetch every batch of a collection and process each one exactly once.

        The batch at offset 0 is fetched and processed first, on its own, to
        learn the total count. The remaining batches are fetched
        concurrently, but ``process_batch`` is never called for two batches
        at the same time. Processing order among batches after the first is
        not guaranteed.

        Stopping is cooperative: once the processor requests an abort, or any
        batch fails, no new batch is started and batches already being
        fetched are discarded when they arrive. The call still waits for them.

        Args:
            get_batch: Async function that fetches the batch at an offset
            process_batch: Async function called with (payload, etag);
                returns True to stop without error

        Returns:
            The recorded ETag. With ETag validation this is the ETag shared
            by all batches. Without it, it is the ETag of the last batch
            processed, which depends on completion order and is therefore
            not deterministic when more than one worker is used. This is not
            always the last batch fetched: a batch that arrives after the run
            was stopped is discarded, and its ETag is never recorded.

        Raises:
            ETagMismatchError: If validation is enabled and a batch's ETag differs
            Exception: The first error raised by ``get_batch`` or ``process_batch``
        """
        policy = self._policy
        started = perf_counter()

        try:
            first = await get_batch(0)
        except Exception as e:
            log_batch_error(offset=0, error=e, first=True)
            raise

        state = BatchJobState(total_count=first.total_count, etag=first.etag, batches_fetched=1)

        try:
            abort = await process_batch(first.payload, first.etag)
        except Exception as e:
            log_batch_error(offset=0, error=e, first=True)
            raise
        state.batches_processed = 1

        if abort:
            state.abort()
            log_batch_aborted(offset=0)
        else:
            remaining = calculate_remaining_calls(state.total_count, policy.batch_size)
            log_batch_plan(
                total_count=state.total_count,
                batch_size=policy.batch_size,
                max_workers=policy.max_workers,
                remaining_calls=remaining,
                validate_etag=policy.validate_etag,
            )
            if remaining > 0:
                await self._run_workers(state, get_batch, process_batch, remaining)

        log_batch_execution_complete(
            state=state, total_latency_ms=(perf_counter() - started) * 1000.0
        )

        if state.error is not None:
            raise state.error
        return state.etag

    async def _run_workers(
        self,
        state: BatchJobState,
        get_batch: BatchGetter,
        process_batch: BatchProcessor,
        remaining: int,
    ) -> None:
        """Launch one task per remaining batch, at most max_workers at a time."""
        batch_size = self._policy.batch_size
        semaphore = asyncio.Semaphore(self._policy.max_workers)
        lock = asyncio.Lock()

        async def worker(offset: int) -> None:
            try:
                await self._process_offset(offset, state, lock, get_batch, process_batch)
            finally:
                semaphore.release()

        tasks: list[asyncio.Task[None]] = []
        try:
            for i in range(remaining):
                await semaphore.acquire()
                if state.aborted:
                    semaphore.release()
                    state.batches_skipped += remaining - i
                    break
                tasks.append(asyncio.create_task(worker((i + 1) * batch_size)))
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _process_offset(
        self,
        offset: int,
        state: BatchJobState,
        lock: asyncio.Lock,
        get_batch: BatchGetter,
        process_batch: BatchProcessor,
    ) -> None:
        # Skip if another worker already stopped the run
        if state.aborted:
            state.batches_skipped += 1
            return

        fetch_start = perf_counter()
        try:
            batch = await get_batch(offset)
        except Exception as e:
            async with lock:
                first = state.fail(e)
            log_batch_error(offset=offset, error=e, first=first)
            return

        async with lock:
            state.batches_fetched += 1

            # Fetched while aborting: discard
            if state.aborted:
                state.batches_skipped += 1
                return

            if self._policy.validate_etag and batch.etag != state.etag:
                mismatch = ETagMismatchError(state.etag, batch.etag, offset=offset)
                state.fail(mismatch)
                log_etag_mismatch(offset=offset, expected=state.etag, actual=batch.etag)
                return

            state.etag = batch.etag

            try:
                abort = await process_batch(batch.payload, batch.etag)
            except Exception as e:
                first = state.fail(e)
                log_batch_error(offset=offset, error=e, first=first)
                return
            state.batches_processed += 1

            if abort:
                state.abort()
                log_batch_aborted(offset=offset)
            else:
                log_batch_processed(
                    offset=offset,
                    etag=batch.etag,
                    latency_ms=(perf_counter() - fetch_start) * 1000.0,
                )

    async def run_sequential(self, items: Sequence[Any], process_chunk: ChunkProcessor) -> int:
        """Process items in chunks of batch_size, one chunk at a time, in order.

        Args:
            items: Values to split
            process_chunk: Async function awaited once per chunk

        Returns:
            Number of chunks processed (0 for an empty list)

        Raises:
            BatchSplitError: If a chunk fails. ``processed_batches`` holds the
                number of chunks that succeeded before it.
        """
        batch_size = self._policy.batch_size
        processed = 0
        for chunk in split_in_chunks(items, batch_size):
            try:
                await process_chunk(chunk)
            except Exception as e:
                log_batch_error(offset=processed * batch_size, error=e, first=True)
                raise BatchSplitError(
                    f"failed to process batch {processed}: {e}", processed_batches=processed
                ) from e
            processed += 1

        log_batch_split_complete(
            num_items=len(items), batch_size=batch_size, processed_batches=processed
        )
        return processed


async def process_in_concurrent_batches(
    get_batch: BatchGetter,
    process_batch: BatchProcessor,
    batch_size: int,
    max_workers: int,
    *,
    validate_etag: bool = False,
) -> str:
    """Concurrently fetch a collection in batches and process each batch.

    See BatchExecutor.run_concurrent.
    """
    policy = BatchPolicy(
        batch_size=batch_size, max_workers=max_workers, validate_etag=validate_etag
    )
    return await BatchExecutor(policy).run_concurrent(
        get_batch=get_batch, process_batch=process_batch
    )


async def process_in_batches(
    items: Sequence[Any],
    process_chunk: ChunkProcessor,
    batch_size: int,
) -> int:
    """Split items in batches and await process_chunk for each, sequentially.

    See BatchExecutor.run_sequential.
    """
    return await BatchExecutor(BatchPolicy(batch_size=batch_size, max_workers=1)).run_sequential(
        items, process_chunk
    )
