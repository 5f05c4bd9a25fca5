"""Dataset API connector constants."""

from __future__ import annotations

SERVICE = "dataset-api"

DATASETS_PATH = "/datasets"
INSTANCES_PATH = "/instances"


def versions_path(dataset_id: str, edition: str) -> str:
    return f"/datasets/{dataset_id}/editions/{edition}/versions"


def options_path(dataset_id: str, edition: str, version: str, dimension: str) -> str:
    return f"{versions_path(dataset_id, edition)}/{version}/dimensions/{dimension}/options"


def instance_dimensions_path(instance_id: str) -> str:
    return f"{INSTANCES_PATH}/{instance_id}/dimensions"
