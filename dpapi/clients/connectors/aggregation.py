"""Offset-indexed aggregation of paginated batches."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from ..core.exceptions import BatchAggregationError

T = TypeVar("T")


class OffsetAggregator(Generic[T]):
    """Batch processor that rebuilds a collection from its batches.

    The first batch received sizes the result to its ``total_count``. Every
    batch then writes its items at ``offset + i``, so the API order is
    preserved whatever order batches arrive in.

    Instances are used as the ``process_batch`` callback of the batch
    executor, which never calls them concurrently.
    """

    def __init__(self) -> None:
        self._items: list[T | None] | None = None
        self.total_count = 0

    async def __call__(self, batch: Any, etag: str) -> bool:
        """Store the items of a batch at their offsets.

        Raises:
            BatchAggregationError: If an item falls beyond the announced total
        """
        if self._items is None:
            self.total_count = batch.total_count
            self._items = [None] * batch.total_count

        end = batch.offset + len(batch.items)
        if end > len(self._items):
            raise BatchAggregationError(
                f"offset index out of bounds: batch at offset {batch.offset} "
                f"needs length {end}, collection length is {len(self._items)}"
            )
        self._items[batch.offset : end] = batch.items
        return False

    @property
    def items(self) -> list[T]:
        """Aggregated items in collection order.

        Raises:
            BatchAggregationError: If some positions were never filled
        """
        if self._items is None:
            return []
        missing = sum(1 for item in self._items if item is None)
        if missing:
            raise BatchAggregationError(
                f"{missing} of {len(self._items)} items were not received"
            )
        return list(self._items)
