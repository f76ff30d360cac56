"""
Linux virtual machine scale set configuration schema.

Flat, declarative configuration as seen by the orchestrator. Per-field rules
live here; rules that span several fields are enforced when the API request
is built (see vmss.core.mapping.request).

Dependencies: pydantic, vmss.core.validators
System role: Configuration contract for the scale set resource
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vmss.core.location import normalize_location
from vmss.core.tags import validate_tags
from vmss.core.validators import (
    validate_linux_name,
    validate_no_empty_string,
    validate_resource_group_name,
    validate_resource_id,
)

# Configuration keys whose change requires a new scale set
FORCE_NEW_FIELDS: tuple[str, ...] = (
    "name",
    "resource_group_name",
    "location",
    "disable_password_authentication",
)

UpgradeMode = Literal["Automatic", "Manual", "Rolling"]
Priority = Literal["Low", "Regular"]
EvictionPolicy = Literal["Deallocate", "Delete"]


class _Block(BaseModel):
    """Nested configuration block; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


def _check_resource_ids(values: list[str]) -> list[str]:
    for value in values:
        validate_resource_id(value)
    return values


class IPTag(_Block):
    """IP tag attached to a public IP address configuration."""

    tag: str
    type: str


class PublicIPAddress(_Block):
    """Public IP address assigned to each instance's IP configuration."""

    name: str
    domain_name_label: str | None = None
    idle_timeout_in_minutes: int | None = Field(default=None, ge=4, le=32)
    ip_tag: list[IPTag] = Field(default_factory=list)
    public_ip_prefix_id: str | None = None

    @field_validator("public_ip_prefix_id")
    @classmethod
    def _prefix_id(cls, value: str | None) -> str | None:
        return validate_resource_id(value) if value else value


class IPConfiguration(_Block):
    """IP configuration of a scale set network interface."""

    name: str
    application_gateway_backend_address_pool_ids: list[str] = Field(default_factory=list)
    application_security_group_ids: list[str] = Field(default_factory=list, max_length=20)
    load_balancer_backend_address_pool_ids: list[str] = Field(default_factory=list)
    load_balancer_inbound_nat_rules_ids: list[str] = Field(default_factory=list)
    primary: bool = False
    public_ip_address: list[PublicIPAddress] = Field(default_factory=list, max_length=1)
    subnet_id: str | None = None
    version: Literal["IPv4", "IPv6"] = "IPv4"

    @field_validator(
        "application_gateway_backend_address_pool_ids",
        "application_security_group_ids",
        "load_balancer_backend_address_pool_ids",
        "load_balancer_inbound_nat_rules_ids",
    )
    @classmethod
    def _id_lists(cls, values: list[str]) -> list[str]:
        return _check_resource_ids(values)

    @field_validator("subnet_id")
    @classmethod
    def _subnet_id(cls, value: str | None) -> str | None:
        return validate_resource_id(value) if value else value


class NetworkInterface(_Block):
    """Network interface configuration applied to every instance."""

    name: str
    ip_configuration: list[IPConfiguration] = Field(min_length=1)
    dns_servers: list[str] = Field(default_factory=list)
    enable_accelerated_networking: bool = False
    enable_ip_forwarding: bool = False
    network_security_group_id: str | None = None
    primary: bool = False

    @field_validator("network_security_group_id")
    @classmethod
    def _nsg_id(cls, value: str | None) -> str | None:
        return validate_resource_id(value) if value else value


class DiffDiskSettings(_Block):
    """Ephemeral OS disk placement."""

    option: Literal["Local"]


class OSDisk(_Block):
    """Managed OS disk of every instance."""

    caching: Literal["None", "ReadOnly", "ReadWrite"]
    storage_account_type: Literal["Standard_LRS", "StandardSSD_LRS", "Premium_LRS"]
    diff_disk_settings: DiffDiskSettings | None = None
    disk_encryption_set_id: str | None = None
    disk_size_gb: int | None = Field(default=None, ge=1, le=1023)
    write_accelerator_enabled: bool = False

    @field_validator("disk_encryption_set_id")
    @classmethod
    def _des_id(cls, value: str | None) -> str | None:
        return validate_resource_id(value) if value else value


class SourceImageReference(_Block):
    """Marketplace image the instances are created from."""

    publisher: str
    offer: str
    sku: str
    version: str


class AdminSSHKey(_Block):
    """SSH public key installed for a user."""

    public_key: str
    username: str

    @field_validator("public_key", "username")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        return validate_no_empty_string(value)


class AdditionalCapabilities(_Block):
    """Optional hardware capabilities."""

    ultra_ssd_enabled: bool = False


class AutomaticOSUpgradePolicy(_Block):
    """Policy used when upgrade_mode is Automatic."""

    disable_automatic_rollback: bool
    enable_automatic_os_upgrade: bool


class RollingUpgradePolicy(_Block):
    """Policy used when upgrade_mode is Rolling."""

    max_batch_instance_percent: int = Field(ge=5, le=100)
    max_unhealthy_instance_percent: int = Field(ge=5, le=100)
    max_unhealthy_upgraded_instance_percent: int = Field(ge=0, le=100)
    pause_time_between_batches: str
    health_probe_id: str

    @field_validator("pause_time_between_batches")
    @classmethod
    def _iso_duration(cls, value: str) -> str:
        if not value.startswith("P"):
            raise ValueError(f"{value!r} is not an ISO 8601 duration (e.g. PT0S)")
        return value

    @field_validator("health_probe_id")
    @classmethod
    def _probe_id(cls, value: str) -> str:
        return validate_resource_id(value)


class LinuxVirtualMachineScaleSetArgs(BaseModel):
    """Desired configuration of a Linux virtual machine scale set."""

    # Orchestrator payloads carry bookkeeping and computed keys
    model_config = ConfigDict(extra="ignore")

    # Required
    name: str = Field(description="Scale set name (force new)")
    resource_group_name: str = Field(description="Resource group (force new)")
    location: str = Field(description="Azure region (force new)")
    admin_username: str
    network_interface: list[NetworkInterface] = Field(min_length=1)
    os_disk: OSDisk
    instances: int = Field(ge=0, description="Number of instances (SKU capacity)")
    sku: str = Field(description="VM size, e.g. Standard_F2")

    # Optional
    additional_capabilities: AdditionalCapabilities | None = None
    admin_password: str | None = Field(default=None, repr=False)
    admin_ssh_key: list[AdminSSHKey] = Field(default_factory=list)
    computer_name_prefix: str | None = None
    disable_password_authentication: bool = True
    do_not_run_extensions_on_overprovisioned_machines: bool = False
    eviction_policy: EvictionPolicy | None = None
    overprovision: bool = False
    platform_fault_domain_count: int | None = None
    priority: Priority = "Regular"
    provision_vm_agent: bool = True
    proximity_placement_group_id: str | None = None
    single_placement_group: bool = False
    source_image_id: str | None = None
    source_image_reference: SourceImageReference | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    upgrade_mode: UpgradeMode = "Manual"
    automatic_os_upgrade_policy: AutomaticOSUpgradePolicy | None = None
    rolling_upgrade_policy: RollingUpgradePolicy | None = None
    zone_balance: bool = False
    zones: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return validate_linux_name(value)

    @field_validator("computer_name_prefix")
    @classmethod
    def _computer_name_prefix(cls, value: str | None) -> str | None:
        # An empty prefix falls back to the scale set name
        return validate_linux_name(value) if value else value

    @field_validator("resource_group_name")
    @classmethod
    def _resource_group_name(cls, value: str) -> str:
        return validate_resource_group_name(value)

    @field_validator("location")
    @classmethod
    def _location(cls, value: str) -> str:
        return normalize_location(validate_no_empty_string(value))

    @field_validator("admin_username", "sku")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        return validate_no_empty_string(value)

    @field_validator("proximity_placement_group_id", "source_image_id")
    @classmethod
    def _resource_ids(cls, value: str | None) -> str | None:
        return validate_resource_id(value) if value else value

    @field_validator("tags")
    @classmethod
    def _tags(cls, value: dict[str, str]) -> dict[str, str]:
        return validate_tags(value)
