"""
OS disk mapping.

Dependencies: azure-mgmt-compute
System role: os_disk <-> storageProfile.osDisk
"""

from typing import Any

from azure.mgmt.compute.models import (
    DiffDiskSettings,
    DiskEncryptionSetParameters,
    VirtualMachineScaleSetManagedDiskParameters,
    VirtualMachineScaleSetOSDisk,
)

from vmss.core.mapping.common import enum_value, sub_resource_id
from vmss.models.scale_set import OSDisk

# Scale set OS disks are always built from the source image
OS_DISK_CREATE_OPTION = "FromImage"


def expand_os_disk(os_disk: OSDisk, os_type: str = "Linux") -> VirtualMachineScaleSetOSDisk:
    """
    Build the scale set OS disk from the os_disk block.

    Args:
        os_disk: Configured OS disk
        os_type: Operating system family of the image

    Returns:
        VirtualMachineScaleSetOSDisk: SDK OS disk definition
    """
    managed_disk = VirtualMachineScaleSetManagedDiskParameters(
        storage_account_type=os_disk.storage_account_type,
    )
    if os_disk.disk_encryption_set_id:
        managed_disk.disk_encryption_set = DiskEncryptionSetParameters(
            id=os_disk.disk_encryption_set_id,
        )

    disk = VirtualMachineScaleSetOSDisk(
        create_option=OS_DISK_CREATE_OPTION,
        caching=os_disk.caching,
        managed_disk=managed_disk,
        os_type=os_type,
        write_accelerator_enabled=os_disk.write_accelerator_enabled,
    )
    if os_disk.diff_disk_settings is not None:
        disk.diff_disk_settings = DiffDiskSettings(option=os_disk.diff_disk_settings.option)
    if os_disk.disk_size_gb:
        disk.disk_size_gb = os_disk.disk_size_gb
    return disk


def flatten_os_disk(disk: VirtualMachineScaleSetOSDisk | None) -> dict[str, Any] | None:
    """Flatten the SDK OS disk into os_disk state (None when absent)."""
    if disk is None:
        return None

    storage_account_type = None
    disk_encryption_set_id = None
    if disk.managed_disk is not None:
        storage_account_type = enum_value(disk.managed_disk.storage_account_type)
        disk_encryption_set_id = sub_resource_id(disk.managed_disk.disk_encryption_set)

    diff_disk_settings = None
    if disk.diff_disk_settings is not None and disk.diff_disk_settings.option:
        diff_disk_settings = {"option": enum_value(disk.diff_disk_settings.option)}

    return {
        "caching": enum_value(disk.caching),
        "storage_account_type": storage_account_type,
        "diff_disk_settings": diff_disk_settings,
        "disk_encryption_set_id": disk_encryption_set_id,
        "disk_size_gb": disk.disk_size_gb,
        "write_accelerator_enabled": bool(disk.write_accelerator_enabled),
    }
