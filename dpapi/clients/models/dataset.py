"""Dataset API data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .pagination import PaginatedList


class Dataset(BaseModel):
    """Dataset summary as listed by the dataset API."""

    id: str = Field(..., min_length=1)
    title: str | None = None
    description: str | None = None
    state: str | None = None
    links: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")


class DatasetList(PaginatedList):
    """A page of datasets."""

    items: list[Dataset] = Field(default_factory=list)


class Option(BaseModel):
    """A dimension option of a dataset version."""

    dimension: str = ""
    label: str = ""
    option: str = Field(..., min_length=1)
    links: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")


class Options(PaginatedList):
    """A page of dataset dimension options."""

    items: list[Option] = Field(default_factory=list)


class VersionDimension(BaseModel):
    """A dimension as described on a dataset version."""

    id: str = ""
    name: str = ""
    label: str = ""
    description: str = ""
    href: str = ""
    variable: str = ""
    number_of_options: int = 0
    links: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")


class Version(BaseModel):
    """A version of a dataset edition."""

    id: str = ""
    collection_id: str = ""
    edition: str = ""
    version: int = 0
    instance_id: str = ""
    release_date: str = ""
    state: str = ""
    dimensions: list[VersionDimension] = Field(default_factory=list)
    downloads: dict[str, Any] = Field(default_factory=dict)
    links: dict[str, Any] = Field(default_factory=dict)
    total_observations: int = 0

    model_config = ConfigDict(frozen=True, extra="ignore")


class VersionsList(PaginatedList):
    """A page of versions of a dataset edition."""

    items: list[Version] = Field(default_factory=list)


class Instance(Version):
    """An instance: a dataset version being imported or published."""


class Instances(PaginatedList):
    """A page of instances."""

    items: list[Instance] = Field(default_factory=list)


class InstanceDimension(BaseModel):
    """A dimension option stored against an instance."""

    dimension: str = ""
    instance_id: str = ""
    node_id: str = ""
    label: str = ""
    option: str = ""
    links: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="ignore")


class InstanceDimensions(PaginatedList):
    """A page of instance dimension options."""

    items: list[InstanceDimension] = Field(default_factory=list)
