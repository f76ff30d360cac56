"""
Field validators shared by the configuration schema.

Each validator returns the value unchanged or raises ValueError, so they can
be used directly inside pydantic field validators.

Dependencies: vmss.core.resource_id
System role: Per-field validation rules
"""

import re

from vmss.core.exceptions import ResourceIdParseError
from vmss.core.resource_id import parse_resource_id

LINUX_NAME_MAX_LENGTH = 64
LINUX_NAME_SPECIAL_CHARACTERS = "\\/\"[]:|<>+=;,?*@&~!#$%^()_{}'"

_RESOURCE_GROUP_NAME = re.compile(r"^[-\w._()]+$")


def validate_linux_name(value: str) -> str:
    """
    Validate a Linux host name (scale set name or computer name prefix).

    Args:
        value: Candidate name

    Returns:
        str: The unchanged name

    Raises:
        ValueError: If the name breaks Linux host name rules
    """
    if not value:
        raise ValueError("name cannot be empty")
    if len(value) > LINUX_NAME_MAX_LENGTH:
        raise ValueError(
            f"{value!r} can be at most {LINUX_NAME_MAX_LENGTH} characters, got {len(value)}"
        )
    if value.startswith("_"):
        raise ValueError(f"{value!r} cannot begin with an underscore")
    if value.endswith(".") or value.endswith("-"):
        raise ValueError(f"{value!r} cannot end with a period or dash")
    if any(char in LINUX_NAME_SPECIAL_CHARACTERS for char in value):
        raise ValueError(
            f"{value!r} cannot contain the special characters: `{LINUX_NAME_SPECIAL_CHARACTERS}`"
        )
    return value


def validate_no_empty_string(value: str) -> str:
    """Reject empty or whitespace-only strings."""
    if not value.strip():
        raise ValueError("value must not be empty or consist only of whitespace")
    return value


def validate_resource_group_name(value: str) -> str:
    """
    Validate an Azure resource group name.

    Args:
        value: Candidate resource group name

    Returns:
        str: The unchanged name

    Raises:
        ValueError: If the name is too long or uses forbidden characters
    """
    if len(value) > 90:
        raise ValueError("resource group name may not exceed 90 characters in length")
    if value.endswith("."):
        raise ValueError("resource group name may not end with a period")
    if not _RESOURCE_GROUP_NAME.match(value):
        raise ValueError(
            "resource group name may only contain alphanumeric characters, dash, "
            "underscores, parentheses and periods"
        )
    return value


def validate_resource_id(value: str) -> str:
    """
    Validate that a string is a parseable Azure resource ID.

    Raises:
        ValueError: If the ID cannot be parsed
    """
    try:
        parse_resource_id(value)
    except ResourceIdParseError as e:
        raise ValueError(e.message) from e
    return value
