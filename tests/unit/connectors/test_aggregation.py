"""Unit tests for offset-indexed aggregation."""

from __future__ import annotations

import pytest

from dpapi.clients.connectors import OffsetAggregator
from dpapi.clients.core import BatchAggregationError
from dpapi.clients.models import DimensionOption, DimensionOptions
from dpapi.clients.runtime.batching import BatchResult, process_in_concurrent_batches


def page(offset: int, options: list[str], total: int) -> DimensionOptions:
    return DimensionOptions(
        items=[DimensionOption(option=o) for o in options],
        count=len(options),
        offset=offset,
        limit=2,
        total_count=total,
    )


class TestOffsetAggregator:
    @pytest.mark.asyncio
    async def test_out_of_order_batches(self):
        """Test items land at their offsets whatever order batches arrive in."""
        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()

        assert await aggregator(page(0, ["a", "b"], 5), "") is False
        await aggregator(page(4, ["e"], 5), "")
        await aggregator(page(2, ["c", "d"], 5), "")

        assert [o.option for o in aggregator.items] == ["a", "b", "c", "d", "e"]
        assert aggregator.total_count == 5

    @pytest.mark.asyncio
    async def test_items_beyond_total_raise(self):
        """Test a batch reaching past the first batch's total fails instead of truncating."""
        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()
        await aggregator(page(0, ["a", "b"], 3), "")

        with pytest.raises(BatchAggregationError, match="out of bounds"):
            await aggregator(page(2, ["c", "d", "e"], 5), "")

    @pytest.mark.asyncio
    async def test_first_batch_larger_than_total_raises(self):
        """Test a first batch holding more items than its total fails."""
        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()

        with pytest.raises(BatchAggregationError):
            await aggregator(page(0, ["a", "b"], 1), "")

    @pytest.mark.asyncio
    async def test_missing_batch_raises_on_read(self):
        """Test reading items with an unfilled gap fails instead of shifting later items."""
        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()
        await aggregator(page(0, ["a"], 3), "")
        await aggregator(page(2, ["c"], 3), "")

        with pytest.raises(BatchAggregationError, match="1 of 3"):
            aggregator.items

    @pytest.mark.asyncio
    async def test_aggregation_error_propagates_from_executor(self):
        """Test the executor surfaces the aggregation error of a grown collection."""
        pages = {0: page(0, ["a", "b"], 3), 2: page(2, ["c", "d", "e"], 5)}

        async def get_batch(offset: int) -> BatchResult:
            p = pages[offset]
            return BatchResult(payload=p, total_count=p.total_count)

        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()

        with pytest.raises(BatchAggregationError):
            await process_in_concurrent_batches(get_batch, aggregator, 2, 2)

    def test_empty(self):
        """Test an aggregator that never received a batch is empty."""
        assert OffsetAggregator().items == []
