"""Dataset API client."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import TypeVar

from ...core.headers import RequestAuth
from ...models import (
    Dataset,
    DatasetList,
    Instance,
    InstanceDimension,
    InstanceDimensions,
    Instances,
    Option,
    Options,
    PaginatedList,
    QueryParams,
    Version,
    VersionsList,
)
from ...runtime.batching import BatchGetter, BatchResult, process_in_concurrent_batches
from ..aggregation import OffsetAggregator
from ..base import BaseClient
from .config import (
    DATASETS_PATH,
    INSTANCES_PATH,
    SERVICE,
    instance_dimensions_path,
    options_path,
    versions_path,
)

P = TypeVar("P", bound=PaginatedList)

DatasetsBatchProcessor = Callable[[DatasetList], Awaitable[bool]]
OptionsBatchProcessor = Callable[[Options], Awaitable[bool]]
VersionsBatchProcessor = Callable[[VersionsList], Awaitable[bool]]
InstancesBatchProcessor = Callable[[Instances], Awaitable[bool]]
InstanceDimensionsBatchProcessor = Callable[[InstanceDimensions], Awaitable[bool]]


def _collect(aggregator: OffsetAggregator, model: type[P]) -> P:
    items = aggregator.items
    return model(items=items, count=len(items), limit=len(items), total_count=aggregator.total_count)


class DatasetClient(BaseClient):
    """Client for the dataset API.

    The dataset API list endpoints carry no ETag, so batched reads run
    without ETag validation and batch processors receive only the page.
    """

    service = SERVICE

    async def _get_page(
        self,
        path: str,
        model: type[P],
        auth: RequestAuth,
        query: QueryParams | None = None,
        filters: Mapping[str, str] | None = None,
    ) -> P:
        params: list[tuple[str, str]] | None = None
        if filters:
            params = list(filters.items())
        if query is not None:
            query.validate_params()
            params = (params or []) + query.to_query()
        resp = await self._http.get(path, params=params, headers=auth.headers())
        return model.model_validate(resp.data)

    async def _batch_process(
        self,
        get_page: Callable[[int], Awaitable[P]],
        process_batch: Callable[[P], Awaitable[bool]],
        batch_size: int,
        max_workers: int,
    ) -> None:
        """Page through a list endpoint by offset, calling process_batch for each page."""

        async def get_batch(offset: int) -> BatchResult:
            page = await get_page(offset)
            return BatchResult(payload=page, total_count=page.total_count)

        await self._run(get_batch, process_batch, batch_size, max_workers)

    @staticmethod
    async def _run(
        get_batch: BatchGetter,
        process_batch: Callable[[P], Awaitable[bool]],
        batch_size: int,
        max_workers: int,
    ) -> None:
        async def batch_processor(page: P, etag: str) -> bool:
            return await process_batch(page)

        await process_in_concurrent_batches(get_batch, batch_processor, batch_size, max_workers)

    # Datasets

    async def get_datasets(self, auth: RequestAuth, query: QueryParams | None = None) -> DatasetList:
        return await self._get_page(DATASETS_PATH, DatasetList, auth, query)

    async def get_datasets_batch_process(
        self,
        auth: RequestAuth,
        process_batch: DatasetsBatchProcessor,
        batch_size: int,
        max_workers: int,
    ) -> None:
        """Get the datasets in concurrent batches, calling process_batch for each."""

        async def get_page(offset: int) -> DatasetList:
            return await self.get_datasets(auth, QueryParams(offset=offset, limit=batch_size))

        await self._batch_process(get_page, process_batch, batch_size, max_workers)

    async def get_datasets_in_batches(
        self, auth: RequestAuth, batch_size: int, max_workers: int
    ) -> DatasetList:
        """Get every dataset, fetched in concurrent batches, in API order."""
        aggregator: OffsetAggregator[Dataset] = OffsetAggregator()

        async def process_batch(page: DatasetList) -> bool:
            return await aggregator(page, "")

        await self.get_datasets_batch_process(auth, process_batch, batch_size, max_workers)
        return _collect(aggregator, DatasetList)

    # Versions

    async def get_versions(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        query: QueryParams | None = None,
    ) -> VersionsList:
        """Get a page of the versions of a dataset edition."""
        return await self._get_page(versions_path(dataset_id, edition), VersionsList, auth, query)

    async def get_versions_batch_process(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        process_batch: VersionsBatchProcessor,
        batch_size: int,
        max_workers: int,
    ) -> None:
        """Get the versions of an edition in concurrent batches, calling process_batch for each."""

        async def get_page(offset: int) -> VersionsList:
            return await self.get_versions(
                auth, dataset_id, edition, QueryParams(offset=offset, limit=batch_size)
            )

        await self._batch_process(get_page, process_batch, batch_size, max_workers)

    async def get_versions_in_batches(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        batch_size: int,
        max_workers: int,
    ) -> VersionsList:
        """Get every version of an edition, fetched in concurrent batches, in API order.

        Raises:
            BatchAggregationError: If the batches do not match the total
                announced by the first one
        """
        aggregator: OffsetAggregator[Version] = OffsetAggregator()

        async def process_batch(page: VersionsList) -> bool:
            return await aggregator(page, "")

        await self.get_versions_batch_process(
            auth, dataset_id, edition, process_batch, batch_size, max_workers
        )
        return _collect(aggregator, VersionsList)

    # Instances

    async def get_instances(
        self,
        auth: RequestAuth,
        filters: Mapping[str, str] | None = None,
        query: QueryParams | None = None,
    ) -> Instances:
        """Get a page of instances.

        Args:
            auth: Caller identity
            filters: Extra query parameters, e.g. ``{"state": "completed"}``
            query: Paging parameters
        """
        return await self._get_page(INSTANCES_PATH, Instances, auth, query, filters)

    async def get_instances_batch_process(
        self,
        auth: RequestAuth,
        filters: Mapping[str, str] | None,
        process_batch: InstancesBatchProcessor,
        batch_size: int,
        max_workers: int,
    ) -> None:
        """Get the instances matching filters in concurrent batches, calling process_batch for each."""

        async def get_page(offset: int) -> Instances:
            return await self.get_instances(
                auth, filters, QueryParams(offset=offset, limit=batch_size)
            )

        await self._batch_process(get_page, process_batch, batch_size, max_workers)

    async def get_instances_in_batches(
        self,
        auth: RequestAuth,
        filters: Mapping[str, str] | None,
        batch_size: int,
        max_workers: int,
    ) -> Instances:
        """Get every instance matching filters, fetched in concurrent batches, in API order."""
        aggregator: OffsetAggregator[Instance] = OffsetAggregator()

        async def process_batch(page: Instances) -> bool:
            return await aggregator(page, "")

        await self.get_instances_batch_process(
            auth, filters, process_batch, batch_size, max_workers
        )
        return _collect(aggregator, Instances)

    async def get_instance_dimensions(
        self, auth: RequestAuth, instance_id: str, query: QueryParams | None = None
    ) -> InstanceDimensions:
        return await self._get_page(
            instance_dimensions_path(instance_id), InstanceDimensions, auth, query
        )

    async def get_instance_dimensions_batch_process(
        self,
        auth: RequestAuth,
        instance_id: str,
        process_batch: InstanceDimensionsBatchProcessor,
        batch_size: int,
        max_workers: int,
    ) -> None:
        """Get the dimension options of an instance in concurrent batches, calling process_batch for each."""

        async def get_page(offset: int) -> InstanceDimensions:
            return await self.get_instance_dimensions(
                auth, instance_id, QueryParams(offset=offset, limit=batch_size)
            )

        await self._batch_process(get_page, process_batch, batch_size, max_workers)

    async def get_instance_dimensions_in_batches(
        self, auth: RequestAuth, instance_id: str, batch_size: int, max_workers: int
    ) -> InstanceDimensions:
        """Get every dimension option of an instance, fetched in concurrent batches, in API order."""
        aggregator: OffsetAggregator[InstanceDimension] = OffsetAggregator()

        async def process_batch(page: InstanceDimensions) -> bool:
            return await aggregator(page, "")

        await self.get_instance_dimensions_batch_process(
            auth, instance_id, process_batch, batch_size, max_workers
        )
        return _collect(aggregator, InstanceDimensions)

    # Options

    async def get_options(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        version: str,
        dimension: str,
        query: QueryParams | None = None,
    ) -> Options:
        """Get a page of options for a dimension of a dataset version.

        If ``query.ids`` is set, only those options are requested.
        """
        return await self._get_page(
            options_path(dataset_id, edition, version, dimension), Options, auth, query
        )

    async def get_options_batch_process(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        version: str,
        dimension: str,
        process_batch: OptionsBatchProcessor,
        batch_size: int,
        max_workers: int,
        option_ids: Sequence[str] | None = None,
    ) -> None:
        """Get the options of a dimension in concurrent batches, calling process_batch for each.

        If ``option_ids`` is provided, only those options are requested, in
        batches of IDs; the total is then the number of IDs. An empty ID
        list requests nothing.
        """
        if option_ids is None:

            async def get_page(offset: int) -> Options:
                return await self.get_options(
                    auth,
                    dataset_id,
                    edition,
                    version,
                    dimension,
                    QueryParams(offset=offset, limit=batch_size),
                )

            await self._batch_process(get_page, process_batch, batch_size, max_workers)
            return

        if not option_ids:
            return

        async def get_batch(offset: int) -> BatchResult:
            batch_ids = list(option_ids[offset : offset + batch_size])
            page = await self.get_options(
                auth, dataset_id, edition, version, dimension, QueryParams(ids=batch_ids)
            )
            return BatchResult(payload=page, total_count=len(option_ids))

        await self._run(get_batch, process_batch, batch_size, max_workers)

    async def get_options_in_batches(
        self,
        auth: RequestAuth,
        dataset_id: str,
        edition: str,
        version: str,
        dimension: str,
        batch_size: int,
        max_workers: int,
    ) -> Options:
        """Get every option of a dimension, fetched in concurrent batches, in API order."""
        aggregator: OffsetAggregator[Option] = OffsetAggregator()

        async def process_batch(page: Options) -> bool:
            return await aggregator(page, "")

        await self.get_options_batch_process(
            auth, dataset_id, edition, version, dimension, process_batch, batch_size, max_workers
        )
        return _collect(aggregator, Options)
