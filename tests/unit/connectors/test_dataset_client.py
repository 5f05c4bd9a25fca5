"""Unit tests for the dataset API client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from dpapi.clients.connectors import DatasetClient
from dpapi.clients.core import BatchAggregationError
from dpapi.clients.core.headers import RequestAuth
from dpapi.clients.models import DatasetList, InstanceDimensions, Instances, Options, VersionsList
from dpapi.clients.runtime.rest import HTTPClient, RESTResponse

AUTH = RequestAuth(service_auth_token="svc")
OPTIONS_PATH = "/datasets/cpih/editions/time-series/versions/1/dimensions/age/options"


def mock_http(get: AsyncMock) -> MagicMock:
    http = MagicMock(spec=HTTPClient)
    http.get = get
    return http


def datasets_get(total: int) -> AsyncMock:
    """GET mock serving a collection of `total` datasets by offset/limit."""

    async def get(path, params=None, headers=None, expected_status=(200,)):
        q = dict(params)
        offset, limit = int(q["offset"]), int(q["limit"])
        ids = range(offset, min(offset + limit, total))
        return RESTResponse(
            status=200,
            data={
                "items": [{"id": f"ds{i}"} for i in ids],
                "count": len(ids),
                "offset": offset,
                "limit": limit,
                "total_count": total,
            },
        )

    return AsyncMock(side_effect=get)


def options_by_id_get() -> AsyncMock:
    async def get(path, params=None, headers=None, expected_status=(200,)):
        ids = [v for k, v in params if k == "id"]
        return RESTResponse(
            status=200,
            data={
                "items": [{"dimension": "age", "option": i} for i in ids],
                "count": len(ids),
                "total_count": len(ids),
            },
        )

    return AsyncMock(side_effect=get)


class TestDatasets:
    """Test dataset list reads."""

    @pytest.mark.asyncio
    async def test_get_datasets(self):
        """Test a dataset page is read from the datasets path without paging."""
        http = mock_http(
            AsyncMock(return_value=RESTResponse(status=200, data={"items": [{"id": "ds0"}]}))
        )
        client = DatasetClient("http://localhost:22000", http_client=http)

        page = await client.get_datasets(AUTH)

        assert isinstance(page, DatasetList)
        args, kwargs = http.get.call_args
        assert args[0] == "/datasets"
        assert kwargs["params"] is None

    @pytest.mark.asyncio
    async def test_get_datasets_in_batches_concurrently(self):
        """Test concurrent batches rebuild the whole list in API order."""
        http = mock_http(datasets_get(11))
        client = DatasetClient("http://localhost:22000", http_client=http)

        datasets = await client.get_datasets_in_batches(AUTH, batch_size=3, max_workers=3)

        assert [d.id for d in datasets.items] == [f"ds{i}" for i in range(11)]
        assert datasets.total_count == 11
        assert datasets.count == 11
        assert http.get.await_count == 4

    @pytest.mark.asyncio
    async def test_datasets_batch_process_abort(self):
        """Test a processor abort on the first batch stops further requests."""
        http = mock_http(datasets_get(11))
        client = DatasetClient("http://localhost:22000", http_client=http)
        seen: list[int] = []

        async def process(page: DatasetList) -> bool:
            seen.append(page.offset)
            return True

        await client.get_datasets_batch_process(AUTH, process, batch_size=3, max_workers=3)

        assert seen == [0]
        assert http.get.await_count == 1


class TestOptions:
    """Test dimension option reads."""

    @pytest.mark.asyncio
    async def test_get_options_in_batches(self):
        """Test options are aggregated in API order from the options path."""
        async def get(path, params=None, headers=None, expected_status=(200,)):
            offset = int(dict(params)["offset"])
            names = ["0", "1", "2"][offset : offset + 2]
            return RESTResponse(
                status=200,
                data={
                    "items": [{"dimension": "age", "option": n} for n in names],
                    "count": len(names),
                    "offset": offset,
                    "limit": 2,
                    "total_count": 3,
                },
            )

        http = mock_http(AsyncMock(side_effect=get))
        client = DatasetClient("http://localhost:22000", http_client=http)

        opts = await client.get_options_in_batches(
            AUTH, "cpih", "time-series", "1", "age", batch_size=2, max_workers=2
        )

        assert [o.option for o in opts.items] == ["0", "1", "2"]
        assert http.get.call_args.args[0] == OPTIONS_PATH

    @pytest.mark.asyncio
    async def test_options_batch_process_by_ids(self):
        """Test an ID list is requested in batches of IDs."""
        http = mock_http(options_by_id_get())
        client = DatasetClient("http://localhost:22000", http_client=http)
        batches: list[list[str]] = []

        async def process(page: Options) -> bool:
            batches.append([o.option for o in page.items])
            return False

        await client.get_options_batch_process(
            AUTH,
            "cpih",
            "time-series",
            "1",
            "age",
            process,
            batch_size=2,
            max_workers=1,
            option_ids=["a", "b", "c", "d", "e"],
        )

        assert batches == [["a", "b"], ["c", "d"], ["e"]]
        requested = [
            [v for k, v in kwargs["params"] if k == "id"] for _, kwargs in http.get.call_args_list
        ]
        assert requested == [["a", "b"], ["c", "d"], ["e"]]

    @pytest.mark.asyncio
    async def test_options_batch_process_empty_ids(self):
        """Test an empty ID list sends no request."""
        http = mock_http(AsyncMock())
        client = DatasetClient("http://localhost:22000", http_client=http)

        await client.get_options_batch_process(
            AUTH, "cpih", "time-series", "1", "age", AsyncMock(), 2, 1, option_ids=[]
        )

        http.get.assert_not_called()


def growing_get(make_item, totals: list[int]) -> AsyncMock:
    """GET mock whose collection total changes between calls (one entry per call)."""
    calls = iter(totals)

    async def get(path, params=None, headers=None, expected_status=(200,)):
        total = next(calls)
        q = dict(params)
        offset, limit = int(q["offset"]), int(q["limit"])
        idx = range(offset, min(offset + limit, total))
        return RESTResponse(
            status=200,
            data={
                "items": [make_item(i) for i in idx],
                "count": len(idx),
                "offset": offset,
                "limit": limit,
                "total_count": total,
            },
        )

    return AsyncMock(side_effect=get)


def version_item(i: int) -> dict:
    return {"id": f"v{i}", "edition": "time-series", "version": i + 1, "state": "published"}


class TestVersions:
    """Test edition version reads."""

    @pytest.mark.asyncio
    async def test_get_versions_in_batches(self):
        """Test versions are aggregated in API order from the edition versions path."""
        http = mock_http(growing_get(version_item, [5, 5, 5]))
        client = DatasetClient("http://localhost:22000", http_client=http)

        versions = await client.get_versions_in_batches(
            AUTH, "cpih", "time-series", batch_size=2, max_workers=2
        )

        assert isinstance(versions, VersionsList)
        assert [v.version for v in versions.items] == [1, 2, 3, 4, 5]
        assert versions.total_count == 5
        assert http.get.call_args.args[0] == "/datasets/cpih/editions/time-series/versions"

    @pytest.mark.asyncio
    async def test_versions_growing_collection_raises(self):
        """Test versions added mid-fetch fail the aggregation rather than being dropped."""
        http = mock_http(growing_get(version_item, [3, 5]))
        client = DatasetClient("http://localhost:22000", http_client=http)

        with pytest.raises(BatchAggregationError, match="out of bounds"):
            await client.get_versions_in_batches(
                AUTH, "cpih", "time-series", batch_size=2, max_workers=1
            )

    @pytest.mark.asyncio
    async def test_versions_shrinking_collection_raises(self):
        """Test versions removed mid-fetch leave a gap that fails the aggregation."""
        http = mock_http(growing_get(version_item, [5, 3, 3]))
        client = DatasetClient("http://localhost:22000", http_client=http)

        with pytest.raises(BatchAggregationError, match="not received"):
            await client.get_versions_in_batches(
                AUTH, "cpih", "time-series", batch_size=2, max_workers=1
            )


class TestInstances:
    """Test instance and instance dimension reads."""

    @pytest.mark.asyncio
    async def test_instances_in_batches_forward_filters(self):
        """Test filters are sent on every batch alongside offset and limit."""
        http = mock_http(growing_get(lambda i: {"id": f"inst{i}"}, [3, 3]))
        client = DatasetClient("http://localhost:22000", http_client=http)

        instances = await client.get_instances_in_batches(
            AUTH, {"state": "completed"}, batch_size=2, max_workers=2
        )

        assert isinstance(instances, Instances)
        assert [i.id for i in instances.items] == ["inst0", "inst1", "inst2"]
        for call in http.get.call_args_list:
            assert call.args[0] == "/instances"
            assert ("state", "completed") in call.kwargs["params"]
        offsets = sorted(dict(c.kwargs["params"])["offset"] for c in http.get.call_args_list)
        assert offsets == ["0", "2"]

    @pytest.mark.asyncio
    async def test_instances_batch_process_abort(self):
        """Test a processor abort on the first batch stops further requests."""
        http = mock_http(growing_get(lambda i: {"id": f"inst{i}"}, [6]))
        client = DatasetClient("http://localhost:22000", http_client=http)
        process = AsyncMock(return_value=True)

        await client.get_instances_batch_process(AUTH, None, process, batch_size=2, max_workers=2)

        process.assert_awaited_once()
        assert http.get.await_count == 1

    @pytest.mark.asyncio
    async def test_instance_dimensions_in_batches(self):
        """Test instance dimension options are aggregated from the instance path."""
        http = mock_http(
            growing_get(lambda i: {"dimension": "age", "option": str(i)}, [4, 4, 4])
        )
        client = DatasetClient("http://localhost:22000", http_client=http)

        dims = await client.get_instance_dimensions_in_batches(
            AUTH, "inst-1", batch_size=2, max_workers=3
        )

        assert isinstance(dims, InstanceDimensions)
        assert [d.option for d in dims.items] == ["0", "1", "2", "3"]
        assert http.get.call_args.args[0] == "/instances/inst-1/dimensions"
