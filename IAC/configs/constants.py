"""
Infrastructure constants for scale set deployments.

Contains VM sizes, image and disk defaults, and default tags.
"""

from typing import Final

# VM sizes by environment
VM_SKUS: Final[dict[str, str]] = {
    "dev": "Standard_B2s",
    "staging": "Standard_D2s_v5",
    "prod": "Standard_D4s_v5",
}

# Instance counts by environment
INSTANCE_COUNTS: Final[dict[str, int]] = {
    "dev": 1,
    "staging": 2,
    "prod": 3,
}

# Marketplace image (Ubuntu 22.04 LTS Gen2)
SOURCE_IMAGE: Final[dict[str, str]] = {
    "publisher": "Canonical",
    "offer": "0001-com-ubuntu-server-jammy",
    "sku": "22_04-lts-gen2",
    "version": "latest",
}

# OS disk settings
OS_DISK_DEFAULTS: Final[dict[str, str]] = {
    "caching": "ReadWrite",
    "storage_account_type": "StandardSSD_LRS",
}

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "linux-vmss",
    "ManagedBy": "pulumi",
}
