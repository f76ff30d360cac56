"""
Tag helpers for Azure resources.

Dependencies: None
System role: Tag validation and expand/flatten between config and API
"""

from typing import Any

MAX_TAG_COUNT = 50
MAX_TAG_KEY_LENGTH = 512
MAX_TAG_VALUE_LENGTH = 256


def validate_tags(tags: dict[str, str]) -> dict[str, str]:
    """
    Validate a tag map against Azure limits.

    Args:
        tags: Tag key/value pairs

    Returns:
        dict[str, str]: The unchanged tags

    Raises:
        ValueError: If a limit is exceeded
    """
    if len(tags) > MAX_TAG_COUNT:
        raise ValueError(f"a maximum of {MAX_TAG_COUNT} tags can be applied to each resource")

    for key, value in tags.items():
        if len(key) > MAX_TAG_KEY_LENGTH:
            raise ValueError(
                f"the maximum length for a tag key is {MAX_TAG_KEY_LENGTH} characters: {key!r} is {len(key)}"
            )
        if len(value) > MAX_TAG_VALUE_LENGTH:
            raise ValueError(
                f"the maximum length for a tag value is {MAX_TAG_VALUE_LENGTH} characters: "
                f"value for {key!r} is {len(value)}"
            )
    return tags


def expand_tags(tags: dict[str, Any] | None) -> dict[str, str]:
    """Convert configured tags into the SDK's string map."""
    return {key: str(value) for key, value in (tags or {}).items()}


def flatten_tags(tags: dict[str, str] | None) -> dict[str, str]:
    """Convert SDK tags into state, treating a missing map as empty."""
    return dict(tags or {})
