"""Paginated list response and query parameter models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import ValidationError

# Maximum number of IDs accepted by list endpoints in a single request
MAX_IDS = 200


class PaginatedList(BaseModel):
    """Pagination fields shared by every list response."""

    count: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="ignore")


class QueryParams(BaseModel):
    """Query parameters for paginated list endpoints.

    Either ``offset``/``limit`` paging or an explicit list of ``ids``.
    """

    offset: int = 0
    limit: int = 0
    ids: list[str] | None = None

    model_config = ConfigDict(frozen=True)

    def validate_params(self) -> None:
        """Check offsets, limits and the number of IDs.

        Raises:
            ValidationError: If offset/limit is negative or too many IDs are given
        """
        if self.offset < 0 or self.limit < 0:
            raise ValidationError("negative offsets or limits are not allowed")
        if self.ids is not None and len(self.ids) > MAX_IDS:
            raise ValidationError(
                f"too many query parameters have been provided. Maximum allowed: {MAX_IDS}"
            )

    def to_query(self) -> list[tuple[str, str]]:
        """Render as query pairs; IDs take precedence over offset/limit."""
        if self.ids:
            return [("id", i) for i in self.ids]
        return [("offset", str(self.offset)), ("limit", str(self.limit))]
