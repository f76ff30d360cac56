"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from IAC.configs.base import EnvironmentConfig
from IAC.configs.environment import get_config
from IAC.configs.constants import (
    VM_SKUS,
    INSTANCE_COUNTS,
    SOURCE_IMAGE,
    OS_DISK_DEFAULTS,
    DEFAULT_TAGS,
)

__all__ = [
    "EnvironmentConfig",
    "get_config",
    "VM_SKUS",
    "INSTANCE_COUNTS",
    "SOURCE_IMAGE",
    "OS_DISK_DEFAULTS",
    "DEFAULT_TAGS",
]
