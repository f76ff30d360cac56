"""Configuration models for the scale set resource."""

from vmss.models.scale_set import (
    FORCE_NEW_FIELDS,
    AdditionalCapabilities,
    AdminSSHKey,
    AutomaticOSUpgradePolicy,
    DiffDiskSettings,
    IPConfiguration,
    IPTag,
    LinuxVirtualMachineScaleSetArgs,
    NetworkInterface,
    OSDisk,
    PublicIPAddress,
    RollingUpgradePolicy,
    SourceImageReference,
)

__all__ = [
    "FORCE_NEW_FIELDS",
    "AdditionalCapabilities",
    "AdminSSHKey",
    "AutomaticOSUpgradePolicy",
    "DiffDiskSettings",
    "IPConfiguration",
    "IPTag",
    "LinuxVirtualMachineScaleSetArgs",
    "NetworkInterface",
    "OSDisk",
    "PublicIPAddress",
    "RollingUpgradePolicy",
    "SourceImageReference",
]
