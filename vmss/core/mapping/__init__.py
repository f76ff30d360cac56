"""
Expand/flatten mapping between the flat configuration and the nested
VirtualMachineScaleSet API model.
"""

from vmss.core.mapping.request import build_scale_set, validate_cross_field_rules
from vmss.core.mapping.state import ScaleSetState, flatten_scale_set

__all__ = [
    "build_scale_set",
    "validate_cross_field_rules",
    "flatten_scale_set",
    "ScaleSetState",
]
