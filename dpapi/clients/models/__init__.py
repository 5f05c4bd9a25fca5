"""Data models for API responses and requests.

Architecture:
    This module exports the Pydantic v2 models used by the service
    connectors. Item models are immutable (frozen=True); list responses
    share the pagination fields of PaginatedList.

Model Categories:
    - Pagination: PaginatedList, QueryParams
    - Filter API: DimensionOption, DimensionOptions
    - Dataset API: Dataset, DatasetList, Option, Options, Version,
      VersionsList, Instance, Instances, InstanceDimension, InstanceDimensions
    - Requests: Patch, PatchOp
"""

from .dataset import (
    Dataset,
    DatasetList,
    Instance,
    InstanceDimension,
    InstanceDimensions,
    Instances,
    Option,
    Options,
    Version,
    VersionDimension,
    VersionsList,
)
from .filter import DimensionOption, DimensionOptions
from .pagination import MAX_IDS, PaginatedList, QueryParams
from .patch import Patch, PatchOp

__all__ = [
    "MAX_IDS",
    "Dataset",
    "DatasetList",
    "DimensionOption",
    "DimensionOptions",
    "Instance",
    "InstanceDimension",
    "InstanceDimensions",
    "Instances",
    "Option",
    "Options",
    "PaginatedList",
    "Patch",
    "PatchOp",
    "QueryParams",
    "Version",
    "VersionDimension",
    "VersionsList",
]
