"""Unit tests for API models."""

from __future__ import annotations

import pytest

from dpapi.clients.core import ValidationError
from dpapi.clients.models import (
    MAX_IDS,
    DimensionOptions,
    Instances,
    Options,
    Patch,
    PatchOp,
    QueryParams,
    VersionsList,
)


class TestQueryParams:
    """Test query parameter validation and rendering."""

    def test_offset_limit_query(self):
        q = QueryParams(offset=10, limit=5)
        q.validate_params()
        assert q.to_query() == [("offset", "10"), ("limit", "5")]

    def test_ids_take_precedence(self):
        q = QueryParams(offset=10, limit=5, ids=["a", "b"])
        assert q.to_query() == [("id", "a"), ("id", "b")]

    @pytest.mark.parametrize("kwargs", [{"offset": -1}, {"limit": -1}])
    def test_negative_values_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            QueryParams(**kwargs).validate_params()

    def test_too_many_ids_rejected(self):
        q = QueryParams(ids=[str(i) for i in range(MAX_IDS + 1)])
        with pytest.raises(ValidationError):
            q.validate_params()

    def test_max_ids_accepted(self):
        QueryParams(ids=[str(i) for i in range(MAX_IDS)]).validate_params()


class TestListModels:
    """Test decoding of paginated list responses."""

    def test_dimension_options_from_json(self):
        opts = DimensionOptions.model_validate(
            {
                "items": [{"dimension_option_url": "http://op1.co.uk", "option": "op1"}],
                "count": 1,
                "offset": 2,
                "limit": 2,
                "total_count": 3,
            }
        )
        assert opts.items[0].option == "op1"
        assert opts.offset == 2
        assert opts.total_count == 3

    def test_options_ignore_unknown_fields(self):
        opts = Options.model_validate(
            {
                "items": [{"dimension": "age", "label": "30", "option": "30", "extra": 1}],
                "total_count": 1,
            }
        )
        assert opts.items[0].dimension == "age"
        assert opts.count == 0

    def test_versions_from_json(self):
        """Test versions decode their nested dimensions."""
        versions = VersionsList.model_validate(
            {
                "items": [
                    {
                        "id": "v1",
                        "edition": "time-series",
                        "version": 2,
                        "dimensions": [{"id": "age", "name": "age", "number_of_options": 3}],
                        "alerts": None,
                    }
                ],
                "count": 1,
                "total_count": 1,
            }
        )
        assert versions.items[0].version == 2
        assert versions.items[0].dimensions[0].number_of_options == 3

    def test_instances_share_version_fields(self):
        instances = Instances.model_validate(
            {"items": [{"id": "inst1", "state": "completed"}], "total_count": 1}
        )
        assert instances.items[0].state == "completed"
        assert instances.total_count == 1


class TestPatch:
    def test_dump_json(self):
        patch = Patch(op=PatchOp.ADD, path="/options/-", value=["a"])
        assert patch.model_dump(mode="json") == {"op": "add", "path": "/options/-", "value": ["a"]}
