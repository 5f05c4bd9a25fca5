"""JSON patch operation model."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class PatchOp(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


class Patch(BaseModel):
    """A single JSON patch operation."""

    op: PatchOp
    path: str
    value: Any = None

    model_config = ConfigDict(frozen=True, use_enum_values=True)
