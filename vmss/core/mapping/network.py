"""
Network interface mapping.

Expands network_interface blocks into scale set network configurations and
flattens them back.

Dependencies: azure-mgmt-compute
System role: network_interface <-> networkProfile.networkInterfaceConfigurations
"""

from typing import Any

from azure.mgmt.compute.models import (
    ApiEntityReference,
    SubResource,
    VirtualMachineScaleSetIPConfiguration,
    VirtualMachineScaleSetIpTag,
    VirtualMachineScaleSetNetworkConfiguration,
    VirtualMachineScaleSetNetworkConfigurationDnsSettings,
    VirtualMachineScaleSetPublicIPAddressConfiguration,
    VirtualMachineScaleSetPublicIPAddressConfigurationDnsSettings,
)

from vmss.core.mapping.common import (
    enum_value,
    expand_sub_resources,
    flatten_sub_resources,
    sub_resource_id,
)
from vmss.models.scale_set import IPConfiguration, NetworkInterface, PublicIPAddress


def _expand_public_ip_address(
    public_ip: PublicIPAddress,
) -> VirtualMachineScaleSetPublicIPAddressConfiguration:
    configuration = VirtualMachineScaleSetPublicIPAddressConfiguration(
        name=public_ip.name,
        idle_timeout_in_minutes=public_ip.idle_timeout_in_minutes,
        ip_tags=[
            VirtualMachineScaleSetIpTag(ip_tag_type=ip_tag.type, tag=ip_tag.tag)
            for ip_tag in public_ip.ip_tag
        ],
    )
    if public_ip.domain_name_label:
        configuration.dns_settings = VirtualMachineScaleSetPublicIPAddressConfigurationDnsSettings(
            domain_name_label=public_ip.domain_name_label,
        )
    if public_ip.public_ip_prefix_id:
        configuration.public_ip_prefix = SubResource(id=public_ip.public_ip_prefix_id)
    return configuration


def _expand_ip_configuration(ip_config: IPConfiguration) -> VirtualMachineScaleSetIPConfiguration:
    configuration = VirtualMachineScaleSetIPConfiguration(
        name=ip_config.name,
        primary=ip_config.primary,
        private_ip_address_version=ip_config.version,
        application_gateway_backend_address_pools=expand_sub_resources(
            ip_config.application_gateway_backend_address_pool_ids
        ),
        application_security_groups=expand_sub_resources(ip_config.application_security_group_ids),
        load_balancer_backend_address_pools=expand_sub_resources(
            ip_config.load_balancer_backend_address_pool_ids
        ),
        load_balancer_inbound_nat_pools=expand_sub_resources(
            ip_config.load_balancer_inbound_nat_rules_ids
        ),
    )
    if ip_config.subnet_id:
        configuration.subnet = ApiEntityReference(id=ip_config.subnet_id)
    if ip_config.public_ip_address:
        configuration.public_ip_address_configuration = _expand_public_ip_address(
            ip_config.public_ip_address[0]
        )
    return configuration


def expand_network_interfaces(
    interfaces: list[NetworkInterface],
) -> list[VirtualMachineScaleSetNetworkConfiguration]:
    """
    Build network interface configurations for the scale set network profile.

    Args:
        interfaces: Configured network_interface blocks

    Returns:
        list[VirtualMachineScaleSetNetworkConfiguration]: SDK configurations
    """
    configurations = []
    for interface in interfaces:
        configuration = VirtualMachineScaleSetNetworkConfiguration(
            name=interface.name,
            primary=interface.primary,
            enable_accelerated_networking=interface.enable_accelerated_networking,
            enable_ip_forwarding=interface.enable_ip_forwarding,
            dns_settings=VirtualMachineScaleSetNetworkConfigurationDnsSettings(
                dns_servers=list(interface.dns_servers),
            ),
            ip_configurations=[
                _expand_ip_configuration(ip_config) for ip_config in interface.ip_configuration
            ],
        )
        if interface.network_security_group_id:
            configuration.network_security_group = SubResource(
                id=interface.network_security_group_id
            )
        configurations.append(configuration)
    return configurations


def _flatten_public_ip_address(
    configuration: VirtualMachineScaleSetPublicIPAddressConfiguration | None,
) -> list[dict[str, Any]]:
    if configuration is None:
        return []

    domain_name_label = None
    if configuration.dns_settings is not None:
        domain_name_label = configuration.dns_settings.domain_name_label

    return [{
        "name": configuration.name,
        "domain_name_label": domain_name_label,
        "idle_timeout_in_minutes": configuration.idle_timeout_in_minutes,
        "ip_tag": [
            {"tag": ip_tag.tag, "type": ip_tag.ip_tag_type}
            for ip_tag in configuration.ip_tags or []
        ],
        "public_ip_prefix_id": sub_resource_id(configuration.public_ip_prefix),
    }]


def _flatten_ip_configuration(configuration: VirtualMachineScaleSetIPConfiguration) -> dict[str, Any]:
    return {
        "name": configuration.name,
        "application_gateway_backend_address_pool_ids": flatten_sub_resources(
            configuration.application_gateway_backend_address_pools
        ),
        "application_security_group_ids": flatten_sub_resources(
            configuration.application_security_groups
        ),
        "load_balancer_backend_address_pool_ids": flatten_sub_resources(
            configuration.load_balancer_backend_address_pools
        ),
        "load_balancer_inbound_nat_rules_ids": flatten_sub_resources(
            configuration.load_balancer_inbound_nat_pools
        ),
        "primary": bool(configuration.primary),
        "public_ip_address": _flatten_public_ip_address(
            configuration.public_ip_address_configuration
        ),
        "subnet_id": sub_resource_id(configuration.subnet),
        "version": enum_value(configuration.private_ip_address_version) or "IPv4",
    }


def flatten_network_interfaces(
    configurations: list[VirtualMachineScaleSetNetworkConfiguration] | None,
) -> list[dict[str, Any]]:
    """
    Flatten network interface configurations into network_interface state.

    Args:
        configurations: SDK configurations from the network profile

    Returns:
        list[dict]: One dict per network interface
    """
    interfaces = []
    for configuration in configurations or []:
        dns_servers: list[str] = []
        if configuration.dns_settings is not None:
            dns_servers = list(configuration.dns_settings.dns_servers or [])

        interfaces.append({
            "name": configuration.name,
            "ip_configuration": [
                _flatten_ip_configuration(ip_config)
                for ip_config in configuration.ip_configurations or []
            ],
            "dns_servers": dns_servers,
            "enable_accelerated_networking": bool(configuration.enable_accelerated_networking),
            "enable_ip_forwarding": bool(configuration.enable_ip_forwarding),
            "network_security_group_id": sub_resource_id(configuration.network_security_group),
            "primary": bool(configuration.primary),
        })
    return interfaces
