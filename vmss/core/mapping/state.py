"""
Scale set response parsing.

Flattens a VirtualMachineScaleSet returned by Get into the flat state dict
handed back to the orchestrator. Keys mirror LinuxVirtualMachineScaleSetArgs
plus the computed `id` and `unique_id`.

Dependencies: azure-mgmt-compute, vmss.core.mapping
System role: API response -> configuration state (flatten)
"""

from typing import Any

from azure.mgmt.compute.models import VirtualMachineScaleSet

from vmss.core.location import normalize_location
from vmss.core.mapping.capabilities import flatten_additional_capabilities
from vmss.core.mapping.common import enum_value, sub_resource_id
from vmss.core.mapping.disks import flatten_os_disk
from vmss.core.mapping.image import flatten_source_image_id, flatten_source_image_reference
from vmss.core.mapping.network import flatten_network_interfaces
from vmss.core.mapping.ssh_keys import flatten_ssh_keys
from vmss.core.mapping.upgrade import (
    flatten_automatic_os_upgrade_policy,
    flatten_rolling_upgrade_policy,
)
from vmss.core.resource_id import ScaleSetId
from vmss.core.tags import flatten_tags

ScaleSetState = dict[str, Any]


def flatten_scale_set(scale_set: VirtualMachineScaleSet, scale_set_id: ScaleSetId) -> ScaleSetState:
    """
    Build orchestrator state from a scale set returned by the API.

    Args:
        scale_set: Get response
        scale_set_id: Parsed ID the scale set was read with

    Returns:
        ScaleSetState: Flat state; admin_password is never included

    Raises:
        FlattenError: If a nested value cannot be mapped onto the schema
    """
    state: ScaleSetState = {
        "id": scale_set.id or str(scale_set_id),
        "name": scale_set_id.name,
        "resource_group_name": scale_set_id.resource_group,
        "location": normalize_location(scale_set.location) if scale_set.location else None,
    }

    sku_name = None
    instances = 0
    if scale_set.sku is not None:
        sku_name = scale_set.sku.name
        if scale_set.sku.capacity is not None:
            instances = int(scale_set.sku.capacity)
    state["instances"] = instances
    state["sku"] = sku_name

    state["additional_capabilities"] = flatten_additional_capabilities(
        scale_set.additional_capabilities
    )
    state["do_not_run_extensions_on_overprovisioned_machines"] = bool(
        scale_set.do_not_run_extensions_on_overprovisioned_v_ms
    )
    state["overprovision"] = bool(scale_set.overprovision)
    state["platform_fault_domain_count"] = scale_set.platform_fault_domain_count
    state["proximity_placement_group_id"] = sub_resource_id(scale_set.proximity_placement_group)
    state["single_placement_group"] = bool(scale_set.single_placement_group)
    state["unique_id"] = scale_set.unique_id
    state["zone_balance"] = bool(scale_set.zone_balance)

    health_probe_id = None
    profile = scale_set.virtual_machine_profile
    if profile is not None:
        state["priority"] = enum_value(profile.priority) or "Regular"
        state["eviction_policy"] = enum_value(profile.eviction_policy)

        storage_profile = profile.storage_profile
        if storage_profile is not None:
            state["os_disk"] = flatten_os_disk(storage_profile.os_disk)
            state["source_image_reference"] = flatten_source_image_reference(
                storage_profile.image_reference
            )
            state["source_image_id"] = flatten_source_image_id(storage_profile.image_reference)

        # admin_password is write-only and never returned
        os_profile = profile.os_profile
        if os_profile is not None:
            state["admin_username"] = os_profile.admin_username
            state["computer_name_prefix"] = os_profile.computer_name_prefix

            linux = os_profile.linux_configuration
            if linux is not None:
                state["disable_password_authentication"] = bool(
                    linux.disable_password_authentication
                )
                state["provision_vm_agent"] = bool(linux.provision_vm_agent)
                state["admin_ssh_key"] = flatten_ssh_keys(linux.ssh)

        network_profile = profile.network_profile
        if network_profile is not None:
            state["network_interface"] = flatten_network_interfaces(
                network_profile.network_interface_configurations
            )
            health_probe_id = sub_resource_id(network_profile.health_probe)

    policy = scale_set.upgrade_policy
    if policy is not None:
        state["upgrade_mode"] = enum_value(policy.mode)
        state["automatic_os_upgrade_policy"] = flatten_automatic_os_upgrade_policy(
            policy.automatic_os_upgrade_policy
        )
        state["rolling_upgrade_policy"] = flatten_rolling_upgrade_policy(
            policy.rolling_upgrade_policy, health_probe_id
        )

    state["zones"] = list(scale_set.zones or [])
    state["tags"] = flatten_tags(scale_set.tags)
    return state
