"""
Scale set request construction.

Expands a validated LinuxVirtualMachineScaleSetArgs into the nested
VirtualMachineScaleSet sent to CreateOrUpdate, enforcing the rules that span
more than one field before anything reaches the API.

Dependencies: azure-mgmt-compute, vmss.core.mapping
System role: Configuration -> API request (expand)
"""

from azure.mgmt.compute.models import (
    ApiEntityReference,
    ImageReference,
    LinuxConfiguration,
    Sku,
    SshConfiguration,
    SubResource,
    UpgradePolicy,
    VirtualMachineScaleSet,
    VirtualMachineScaleSetNetworkProfile,
    VirtualMachineScaleSetOSProfile,
    VirtualMachineScaleSetStorageProfile,
    VirtualMachineScaleSetVMProfile,
)

from vmss.core.exceptions import ValidationError
from vmss.core.location import normalize_location
from vmss.core.mapping.capabilities import expand_additional_capabilities
from vmss.core.mapping.disks import expand_os_disk
from vmss.core.mapping.image import expand_source_image_reference
from vmss.core.mapping.network import expand_network_interfaces
from vmss.core.mapping.ssh_keys import expand_ssh_keys
from vmss.core.mapping.upgrade import (
    expand_automatic_os_upgrade_policy,
    expand_rolling_upgrade_policy,
)
from vmss.core.tags import expand_tags
from vmss.models.scale_set import LinuxVirtualMachineScaleSetArgs

# Promo sizes are billed as Standard too; the API accepts no other tier
SKU_TIER = "Standard"


def validate_cross_field_rules(args: LinuxVirtualMachineScaleSetArgs) -> None:
    """
    Check the rules that relate two or more configuration fields.

    Args:
        args: Parsed configuration

    Raises:
        ValidationError: On the first rule that is broken
    """
    if args.source_image_reference is None and not args.source_image_id:
        raise ValidationError(
            "Either a `source_image_id` or a `source_image_reference` block must be specified!",
            field="source_image_id",
        )

    if args.automatic_os_upgrade_policy is not None and args.upgrade_mode != "Automatic":
        raise ValidationError(
            "An `automatic_os_upgrade_policy` block cannot be specified when "
            "`upgrade_mode` is not set to `Automatic`",
            field="automatic_os_upgrade_policy",
        )
    if args.upgrade_mode == "Automatic" and args.automatic_os_upgrade_policy is None:
        raise ValidationError(
            "An `automatic_os_upgrade_policy` block must be specified when "
            "`upgrade_mode` is set to `Automatic`",
            field="automatic_os_upgrade_policy",
        )

    if args.rolling_upgrade_policy is not None and args.upgrade_mode != "Rolling":
        raise ValidationError(
            "A `rolling_upgrade_policy` block cannot be specified when "
            "`upgrade_mode` is not set to `Rolling`",
            field="rolling_upgrade_policy",
        )
    if args.upgrade_mode == "Rolling" and args.rolling_upgrade_policy is None:
        raise ValidationError(
            "A `rolling_upgrade_policy` block must be specified when "
            "`upgrade_mode` is set to `Rolling`",
            field="rolling_upgrade_policy",
        )

    if args.eviction_policy and args.priority != "Low":
        raise ValidationError(
            "An `eviction_policy` can only be specified when `priority` is set to `Low`",
            field="eviction_policy",
        )

    if args.zone_balance and not args.zones:
        raise ValidationError(
            "`zone_balance` can only be set to `true` when zones are specified",
            field="zone_balance",
        )

    if args.disable_password_authentication and not args.admin_ssh_key:
        raise ValidationError(
            "At least one `admin_ssh_key` must be specified when "
            "`disable_password_authentication` is set to `true`",
            field="admin_ssh_key",
        )
    if not args.disable_password_authentication and not args.admin_password:
        raise ValidationError(
            "An `admin_password` must be specified if "
            "`disable_password_authentication` is set to `false`",
            field="admin_password",
        )


def build_scale_set(args: LinuxVirtualMachineScaleSetArgs) -> VirtualMachineScaleSet:
    """
    Build the CreateOrUpdate payload for a Linux scale set.

    Args:
        args: Parsed configuration

    Returns:
        VirtualMachineScaleSet: Request body

    Raises:
        ValidationError: If a cross-field rule is broken
    """
    validate_cross_field_rules(args)

    image_reference = expand_source_image_reference(args.source_image_reference)
    if image_reference is None:
        image_reference = ImageReference(id=args.source_image_id)

    network_profile = VirtualMachineScaleSetNetworkProfile(
        network_interface_configurations=expand_network_interfaces(args.network_interface),
    )
    upgrade_policy = UpgradePolicy(
        mode=args.upgrade_mode,
        automatic_os_upgrade_policy=expand_automatic_os_upgrade_policy(
            args.automatic_os_upgrade_policy
        ),
    )
    if args.rolling_upgrade_policy is not None:
        upgrade_policy.rolling_upgrade_policy = expand_rolling_upgrade_policy(
            args.rolling_upgrade_policy
        )
        network_profile.health_probe = ApiEntityReference(
            id=args.rolling_upgrade_policy.health_probe_id
        )

    os_profile = VirtualMachineScaleSetOSProfile(
        admin_username=args.admin_username,
        computer_name_prefix=args.computer_name_prefix or args.name,
        linux_configuration=LinuxConfiguration(
            disable_password_authentication=args.disable_password_authentication,
            provision_vm_agent=args.provision_vm_agent,
            ssh=SshConfiguration(public_keys=expand_ssh_keys(args.admin_ssh_key)),
        ),
    )
    if args.admin_password:
        os_profile.admin_password = args.admin_password

    vm_profile = VirtualMachineScaleSetVMProfile(
        priority=args.priority,
        os_profile=os_profile,
        network_profile=network_profile,
        storage_profile=VirtualMachineScaleSetStorageProfile(
            image_reference=image_reference,
            os_disk=expand_os_disk(args.os_disk, os_type="Linux"),
            data_disks=[],
        ),
    )
    if args.eviction_policy:
        vm_profile.eviction_policy = args.eviction_policy

    scale_set = VirtualMachineScaleSet(
        location=normalize_location(args.location),
        tags=expand_tags(args.tags),
        sku=Sku(name=args.sku, capacity=args.instances, tier=SKU_TIER),
        zones=list(args.zones),
        additional_capabilities=expand_additional_capabilities(args.additional_capabilities),
        do_not_run_extensions_on_overprovisioned_v_ms=(
            args.do_not_run_extensions_on_overprovisioned_machines
        ),
        overprovision=args.overprovision,
        single_placement_group=args.single_placement_group,
        upgrade_policy=upgrade_policy,
        virtual_machine_profile=vm_profile,
    )

    if args.proximity_placement_group_id:
        scale_set.proximity_placement_group = SubResource(id=args.proximity_placement_group_id)
    if args.platform_fault_domain_count and args.platform_fault_domain_count > 0:
        scale_set.platform_fault_domain_count = args.platform_fault_domain_count
    if args.zone_balance:
        scale_set.zone_balance = True

    return scale_set
