"""
Core domain logic module.

Contains the exception hierarchy, field validators, Azure ID/location/tag
helpers and the expand/flatten mapping between configuration and API models.
"""

from vmss.core.exceptions import (
    ScaleSetProviderException,
    ValidationError,
    ResourceIdParseError,
    ResourceAlreadyExistsError,
    ScaleSetOperationError,
    OperationTimeoutError,
    FlattenError,
)

__all__ = [
    "ScaleSetProviderException",
    "ValidationError",
    "ResourceIdParseError",
    "ResourceAlreadyExistsError",
    "ScaleSetOperationError",
    "OperationTimeoutError",
    "FlattenError",
]
