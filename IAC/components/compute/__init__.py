"""
Compute components for virtual machine scale sets.

Components:
- LinuxVirtualMachineScaleSet: dynamic resource backed by the vmss service
- LinuxScaleSetComponent: scale set wired from stack configuration
"""

from IAC.components.compute.linux_scale_set import (
    LinuxScaleSetComponent,
    LinuxVirtualMachineScaleSet,
    LinuxVirtualMachineScaleSetProvider,
    ScaleSetOutputs,
)

__all__ = [
    "LinuxScaleSetComponent",
    "LinuxVirtualMachineScaleSet",
    "LinuxVirtualMachineScaleSetProvider",
    "ScaleSetOutputs",
]
