"""Filter API connector constants."""

from __future__ import annotations

SERVICE = "filter-api"

# Path of the option list in dimension PATCH bodies
OPTIONS_PATCH_PATH = "/options/-"


def dimension_path(filter_id: str, name: str) -> str:
    return f"/filters/{filter_id}/dimensions/{name}"


def dimension_options_path(filter_id: str, name: str) -> str:
    return f"{dimension_path(filter_id, name)}/options"
