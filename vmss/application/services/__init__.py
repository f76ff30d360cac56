"""Service orchestrators."""

from .scale_set_service import (
    RESOURCE_TYPE,
    LinuxVirtualMachineScaleSetService,
    build_scale_set_service,
)

__all__ = [
    "RESOURCE_TYPE",
    "LinuxVirtualMachineScaleSetService",
    "build_scale_set_service",
]
