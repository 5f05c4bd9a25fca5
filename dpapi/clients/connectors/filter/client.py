"""Filter API client.

Architecture:
    Thin request/response wrappers over HTTPClient, plus the batched
    operations built on the batching layer:
    - get_dimension_options_batch_process: concurrent paging with an
      optional ETag consistency check
    - get_dimension_options_in_batches: the same, aggregating every option
    - patch_dimension_values: sequential PATCH batches chaining If-Match
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from ...core.exceptions import BatchSplitError
from ...core.headers import IF_MATCH_ANY, RequestAuth
from ...models import DimensionOption, DimensionOptions, Patch, PatchOp, QueryParams
from ...runtime.batching import BatchResult, process_in_batches, process_in_concurrent_batches
from ..aggregation import OffsetAggregator
from ..base import BaseClient
from .config import OPTIONS_PATCH_PATH, SERVICE, dimension_options_path, dimension_path

logger = logging.getLogger(__name__)

DimensionOptionsBatchProcessor = Callable[[DimensionOptions, str], Awaitable[bool]]


class FilterClient(BaseClient):
    """Client for the filter API."""

    service = SERVICE

    async def get_dimension_options(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        query: QueryParams | None = None,
    ) -> tuple[DimensionOptions, str]:
        """Get a page of the options selected for a filter dimension.

        Returns:
            The options page (empty on 204) and the filter ETag
        """
        params = None
        if query is not None:
            query.validate_params()
            params = query.to_query()

        resp = await self._http.get(
            dimension_options_path(filter_id, name),
            params=params,
            headers=auth.headers(),
            expected_status=(200, 204),
        )
        if resp.data is None:
            return DimensionOptions(), resp.etag
        return DimensionOptions.model_validate(resp.data), resp.etag

    async def get_dimension_options_batch_process(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        process_batch: DimensionOptionsBatchProcessor,
        batch_size: int,
        max_workers: int,
        validate_etag: bool,
    ) -> str:
        """Get the dimension options in concurrent batches, calling process_batch for each.

        Returns:
            The filter ETag (see BatchExecutor.run_concurrent)
        """

        async def get_batch(offset: int) -> BatchResult:
            opts, etag = await self.get_dimension_options(
                auth, filter_id, name, QueryParams(offset=offset, limit=batch_size)
            )
            return BatchResult(payload=opts, total_count=opts.total_count, etag=etag)

        return await process_in_concurrent_batches(
            get_batch, process_batch, batch_size, max_workers, validate_etag=validate_etag
        )

    async def get_dimension_options_in_batches(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        batch_size: int,
        max_workers: int,
    ) -> tuple[DimensionOptions, str]:
        """Get every option of a filter dimension, fetched in concurrent batches.

        Batches must all carry the same ETag, otherwise ETagMismatchError is raised.
        """
        aggregator: OffsetAggregator[DimensionOption] = OffsetAggregator()
        etag = await self.get_dimension_options_batch_process(
            auth, filter_id, name, aggregator, batch_size, max_workers, validate_etag=True
        )
        items = aggregator.items
        return (
            DimensionOptions(
                items=items,
                count=len(items),
                offset=0,
                limit=len(items),
                total_count=aggregator.total_count,
            ),
            etag,
        )

    async def add_dimension_values(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        values: Sequence[str],
        batch_size: int,
        if_match: str = IF_MATCH_ANY,
    ) -> str:
        """Add values to a dimension option list in PATCH batches of up to batch_size."""
        return await self.patch_dimension_values(
            auth, filter_id, name, values, [], batch_size, if_match=if_match
        )

    async def remove_dimension_values(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        values: Sequence[str],
        batch_size: int,
        if_match: str = IF_MATCH_ANY,
    ) -> str:
        """Remove values from a dimension option list in PATCH batches of up to batch_size."""
        return await self.patch_dimension_values(
            auth, filter_id, name, [], values, batch_size, if_match=if_match
        )

    async def patch_dimension_values(
        self,
        auth: RequestAuth,
        filter_id: str,
        name: str,
        add_values: Sequence[str],
        remove_values: Sequence[str],
        batch_size: int,
        if_match: str = IF_MATCH_ANY,
    ) -> str:
        """Add and remove values of a dimension option list.

        When everything fits in one batch a single PATCH carries both
        operations. Otherwise the additions, then the removals, are sent in
        sequential batches. Each PATCH sends the ETag returned by the
        previous one as If-Match, so the batches apply to the filter version
        they were built against.

        Returns:
            ETag returned by the last PATCH (``if_match`` if nothing was sent)

        Raises:
            BatchSplitError: If a batched PATCH fails
            APIResponseError: If the single PATCH fails
        """
        path = dimension_path(filter_id, name)
        etag = if_match
        log_data = {
            "filter_id": filter_id,
            "dimension_name": name,
            "batch_size": batch_size,
            "num_add_values": len(add_values),
            "num_remove_values": len(remove_values),
        }
        logger.info("patching dimension options in batches", extra=log_data)

        async def do_patch(body: list[Patch]) -> None:
            nonlocal etag
            resp = await self._http.patch(
                path,
                json_body=[p.model_dump(mode="json") for p in body],
                headers=auth.headers(if_match=etag),
            )
            etag = resp.etag or etag

        if len(add_values) + len(remove_values) <= batch_size:
            if not add_values and not remove_values:
                logger.info("no PATCH operation sent, there are no values to modify")
                return etag

            body = []
            if add_values:
                body.append(Patch(op=PatchOp.ADD, path=OPTIONS_PATCH_PATH, value=list(add_values)))
            if remove_values:
                body.append(
                    Patch(op=PatchOp.REMOVE, path=OPTIONS_PATCH_PATH, value=list(remove_values))
                )
            await do_patch(body)
            logger.info("successfully sent PATCH operation", extra=log_data)
            return etag

        async def patch_add(chunk: Sequence[str]) -> None:
            await do_patch([Patch(op=PatchOp.ADD, path=OPTIONS_PATCH_PATH, value=list(chunk))])

        async def patch_remove(chunk: Sequence[str]) -> None:
            await do_patch([Patch(op=PatchOp.REMOVE, path=OPTIONS_PATCH_PATH, value=list(chunk))])

        try:
            log_data["num_successful_batches_added"] = await process_in_batches(
                add_values, patch_add, batch_size
            )
        except BatchSplitError as e:
            log_data["num_successful_batches_added"] = e.processed_batches
            logger.error("error sending PATCH operations in batches", extra=log_data)
            raise

        try:
            log_data["num_successful_batches_removed"] = await process_in_batches(
                remove_values, patch_remove, batch_size
            )
        except BatchSplitError as e:
            log_data["num_successful_batches_removed"] = e.processed_batches
            logger.error("error sending PATCH operations in batches", extra=log_data)
            raise

        logger.info("successfully sent PATCH operations in batches", extra=log_data)
        return etag
