"""Small conversions shared by the expand/flatten modules."""

from enum import Enum
from typing import Any

from azure.mgmt.compute.models import SubResource


def enum_value(value: Any) -> Any:
    """Return the plain string behind an SDK enum member."""
    if isinstance(value, Enum):
        return value.value
    return value


def expand_sub_resources(ids: list[str]) -> list[SubResource]:
    return [SubResource(id=resource_id) for resource_id in ids]


def flatten_sub_resources(resources: list[Any] | None) -> list[str]:
    return [resource.id for resource in resources or [] if resource.id]


def sub_resource_id(resource: Any) -> str | None:
    return resource.id if resource is not None else None
