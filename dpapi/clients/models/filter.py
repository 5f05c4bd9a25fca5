"""Filter API data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .pagination import PaginatedList


class DimensionOption(BaseModel):
    """An option selected for a filter dimension."""

    dimension_option_url: str = ""
    option: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True, extra="ignore")


class DimensionOptions(PaginatedList):
    """A page of dimension options."""

    items: list[DimensionOption] = Field(default_factory=list)
