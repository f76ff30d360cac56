"""
Test suite for scale set request construction.

Tests the cross-field rules and the nested CreateOrUpdate payload built from
a parsed configuration.

System role: Verification of configuration -> API request expansion
"""

from typing import Any

import pytest

from vmss.core.exceptions import ValidationError
from vmss.core.mapping import build_scale_set, validate_cross_field_rules
from vmss.core.mapping.disks import OS_DISK_CREATE_OPTION
from vmss.core.mapping.request import SKU_TIER
from vmss.models.scale_set import LinuxVirtualMachineScaleSetArgs


def _args(config: dict[str, Any], **overrides: Any) -> LinuxVirtualMachineScaleSetArgs:
    return LinuxVirtualMachineScaleSetArgs.model_validate({**config, **overrides})


@pytest.fixture
def rolling_policy(health_probe_id: str) -> dict[str, Any]:
    """Provide a valid rolling upgrade policy block."""
    return {
        "max_batch_instance_percent": 20,
        "max_unhealthy_instance_percent": 20,
        "max_unhealthy_upgraded_instance_percent": 5,
        "pause_time_between_batches": "PT0S",
        "health_probe_id": health_probe_id,
    }


@pytest.fixture
def automatic_policy() -> dict[str, Any]:
    """Provide a valid automatic OS upgrade policy block."""
    return {"disable_automatic_rollback": True, "enable_automatic_os_upgrade": True}


class TestCrossFieldRules:
    """Test suite for rules spanning several configuration fields."""

    def test_minimal_config_passes(self, scale_set_args: LinuxVirtualMachineScaleSetArgs) -> None:
        validate_cross_field_rules(scale_set_args)

    def test_missing_image_should_fail(self, scale_set_config: dict[str, Any]) -> None:
        """Test one of source_image_id or source_image_reference is required."""
        args = _args(scale_set_config, source_image_reference=None)

        with pytest.raises(ValidationError, match="Either a `source_image_id`") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "source_image_id"

    def test_automatic_policy_requires_automatic_mode(
        self, scale_set_config: dict[str, Any], automatic_policy: dict[str, Any]
    ) -> None:
        args = _args(scale_set_config, automatic_os_upgrade_policy=automatic_policy)

        with pytest.raises(ValidationError, match="cannot be specified") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "automatic_os_upgrade_policy"

    def test_automatic_mode_requires_automatic_policy(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, upgrade_mode="Automatic")

        with pytest.raises(ValidationError, match="must be specified") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "automatic_os_upgrade_policy"

    def test_rolling_policy_requires_rolling_mode(
        self, scale_set_config: dict[str, Any], rolling_policy: dict[str, Any]
    ) -> None:
        args = _args(scale_set_config, rolling_upgrade_policy=rolling_policy)

        with pytest.raises(ValidationError, match="cannot be specified") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "rolling_upgrade_policy"

    def test_rolling_mode_requires_rolling_policy(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, upgrade_mode="Rolling")

        with pytest.raises(ValidationError, match="must be specified") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "rolling_upgrade_policy"

    def test_eviction_policy_requires_low_priority(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, eviction_policy="Delete")

        with pytest.raises(ValidationError, match="`priority` is set to `Low`") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "eviction_policy"

    def test_zone_balance_requires_zones(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, zone_balance=True)

        with pytest.raises(ValidationError, match="zones are specified") as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "zone_balance"

    def test_key_only_auth_requires_ssh_key(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, admin_ssh_key=[])

        with pytest.raises(ValidationError) as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "admin_ssh_key"

    def test_password_auth_requires_password(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, disable_password_authentication=False)

        with pytest.raises(ValidationError) as exc_info:
            validate_cross_field_rules(args)

        assert exc_info.value.field == "admin_password"


class TestBuildScaleSet:
    """Test suite for the CreateOrUpdate payload."""

    def test_build_sets_top_level_fields(self, scale_set_args: LinuxVirtualMachineScaleSetArgs) -> None:
        """Test SKU, location and placement fields."""
        # Act
        scale_set = build_scale_set(scale_set_args)

        # Assert
        assert scale_set.location == "westeurope"
        assert scale_set.sku.name == "Standard_F2"
        assert scale_set.sku.capacity == 2
        assert scale_set.sku.tier == SKU_TIER
        assert scale_set.overprovision is False
        assert scale_set.single_placement_group is False
        assert scale_set.do_not_run_extensions_on_overprovisioned_v_ms is False
        assert scale_set.zones == []
        assert scale_set.tags == {}
        assert scale_set.upgrade_policy.mode == "Manual"
        assert scale_set.upgrade_policy.rolling_upgrade_policy is None
        assert scale_set.proximity_placement_group is None
        assert scale_set.platform_fault_domain_count is None
        assert scale_set.zone_balance is None

    def test_build_always_sends_additional_capabilities(
        self, scale_set_args: LinuxVirtualMachineScaleSetArgs
    ) -> None:
        """Test the capabilities block is present even when not configured."""
        scale_set = build_scale_set(scale_set_args)

        assert scale_set.additional_capabilities is not None
        assert scale_set.additional_capabilities.ultra_ssd_enabled is None

    def test_build_sets_os_profile(self, scale_set_args: LinuxVirtualMachineScaleSetArgs) -> None:
        """Test admin user, SSH keys and the computer name prefix fallback."""
        # Act
        os_profile = build_scale_set(scale_set_args).virtual_machine_profile.os_profile

        # Assert
        assert os_profile.admin_username == "adminuser"
        assert os_profile.admin_password is None
        assert os_profile.computer_name_prefix == "example-vmss"
        linux = os_profile.linux_configuration
        assert linux.disable_password_authentication is True
        assert linux.provision_vm_agent is True
        assert len(linux.ssh.public_keys) == 1
        assert linux.ssh.public_keys[0].path == "/home/adminuser/.ssh/authorized_keys"
        assert linux.ssh.public_keys[0].key_data.startswith("ssh-rsa ")

    def test_build_uses_explicit_computer_name_prefix(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, computer_name_prefix="web")

        os_profile = build_scale_set(args).virtual_machine_profile.os_profile

        assert os_profile.computer_name_prefix == "web"

    def test_build_sets_password_when_configured(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(
            scale_set_config,
            disable_password_authentication=False,
            admin_password="P@ssw0rd1234!",
        )

        os_profile = build_scale_set(args).virtual_machine_profile.os_profile

        assert os_profile.admin_password == "P@ssw0rd1234!"
        assert os_profile.linux_configuration.disable_password_authentication is False

    def test_build_sets_storage_profile(self, scale_set_args: LinuxVirtualMachineScaleSetArgs) -> None:
        """Test the OS disk is built from the image with no data disks."""
        storage_profile = build_scale_set(scale_set_args).virtual_machine_profile.storage_profile

        assert storage_profile.data_disks == []
        assert storage_profile.image_reference.publisher == "Canonical"
        assert storage_profile.image_reference.offer == "UbuntuServer"
        assert storage_profile.image_reference.sku == "16.04-LTS"
        assert storage_profile.image_reference.version == "latest"
        os_disk = storage_profile.os_disk
        assert os_disk.create_option == OS_DISK_CREATE_OPTION
        assert os_disk.caching == "ReadWrite"
        assert os_disk.os_type == "Linux"
        assert os_disk.managed_disk.storage_account_type == "Standard_LRS"
        assert os_disk.diff_disk_settings is None
        assert os_disk.disk_size_gb is None

    def test_build_uses_custom_image_id(self, scale_set_config: dict[str, Any], image_id: str) -> None:
        args = _args(scale_set_config, source_image_reference=None, source_image_id=image_id)

        image_reference = build_scale_set(args).virtual_machine_profile.storage_profile.image_reference

        assert image_reference.id == image_id
        assert image_reference.publisher is None

    def test_build_sets_os_disk_options(self, scale_set_config: dict[str, Any]) -> None:
        os_disk_config = {
            "caching": "ReadOnly",
            "storage_account_type": "Premium_LRS",
            "diff_disk_settings": {"option": "Local"},
            "disk_size_gb": 64,
        }
        args = _args(scale_set_config, os_disk=os_disk_config)

        os_disk = build_scale_set(args).virtual_machine_profile.storage_profile.os_disk

        assert os_disk.diff_disk_settings.option == "Local"
        assert os_disk.disk_size_gb == 64
        assert os_disk.managed_disk.storage_account_type == "Premium_LRS"

    def test_build_sets_network_profile(
        self, scale_set_args: LinuxVirtualMachineScaleSetArgs, subnet_id: str
    ) -> None:
        """Test network interfaces and IP configurations."""
        network_profile = build_scale_set(scale_set_args).virtual_machine_profile.network_profile

        assert network_profile.health_probe is None
        interface = network_profile.network_interface_configurations[0]
        assert interface.name == "example"
        assert interface.primary is True
        assert interface.dns_settings.dns_servers == []
        ip_config = interface.ip_configurations[0]
        assert ip_config.name == "internal"
        assert ip_config.primary is True
        assert ip_config.subnet.id == subnet_id
        assert ip_config.private_ip_address_version == "IPv4"
        assert ip_config.public_ip_address_configuration is None

    def test_build_sets_public_ip_address(self, scale_set_config: dict[str, Any]) -> None:
        scale_set_config["network_interface"][0]["ip_configuration"][0]["public_ip_address"] = [{
            "name": "public",
            "domain_name_label": "example-vmss",
            "idle_timeout_in_minutes": 10,
            "ip_tag": [{"tag": "/Sql", "type": "FirstPartyUsage"}],
        }]
        args = _args(scale_set_config)

        network_profile = build_scale_set(args).virtual_machine_profile.network_profile

        public_ip = network_profile.network_interface_configurations[0].ip_configurations[
            0
        ].public_ip_address_configuration
        assert public_ip.name == "public"
        assert public_ip.dns_settings.domain_name_label == "example-vmss"
        assert public_ip.idle_timeout_in_minutes == 10
        assert public_ip.ip_tags[0].tag == "/Sql"
        assert public_ip.ip_tags[0].ip_tag_type == "FirstPartyUsage"

    def test_build_rolling_policy_sets_health_probe(
        self,
        scale_set_config: dict[str, Any],
        rolling_policy: dict[str, Any],
        health_probe_id: str,
    ) -> None:
        """Test the health probe goes on the network profile, not the policy."""
        args = _args(scale_set_config, upgrade_mode="Rolling", rolling_upgrade_policy=rolling_policy)

        scale_set = build_scale_set(args)

        assert scale_set.upgrade_policy.mode == "Rolling"
        rolling = scale_set.upgrade_policy.rolling_upgrade_policy
        assert rolling.max_batch_instance_percent == 20
        assert rolling.max_unhealthy_instance_percent == 20
        assert rolling.max_unhealthy_upgraded_instance_percent == 5
        assert rolling.pause_time_between_batches == "PT0S"
        assert scale_set.virtual_machine_profile.network_profile.health_probe.id == health_probe_id

    def test_build_automatic_policy(
        self, scale_set_config: dict[str, Any], automatic_policy: dict[str, Any]
    ) -> None:
        args = _args(
            scale_set_config,
            upgrade_mode="Automatic",
            automatic_os_upgrade_policy=automatic_policy,
        )

        policy = build_scale_set(args).upgrade_policy

        assert policy.mode == "Automatic"
        assert policy.automatic_os_upgrade_policy.disable_automatic_rollback is True
        assert policy.automatic_os_upgrade_policy.enable_automatic_os_upgrade is True

    def test_build_low_priority_with_eviction_policy(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, priority="Low", eviction_policy="Deallocate")

        vm_profile = build_scale_set(args).virtual_machine_profile

        assert vm_profile.priority == "Low"
        assert vm_profile.eviction_policy == "Deallocate"

    def test_build_optional_placement_fields(
        self, scale_set_config: dict[str, Any], subnet_id: str
    ) -> None:
        """Test zones, zone balance, fault domains and proximity group."""
        proximity_id = subnet_id.replace(
            "virtualNetworks/example-network/subnets/internal",
            "proximityPlacementGroups/example-ppg",
        )
        args = _args(
            scale_set_config,
            zones=["1", "2"],
            zone_balance=True,
            platform_fault_domain_count=2,
            proximity_placement_group_id=proximity_id,
            additional_capabilities={"ultra_ssd_enabled": True},
            tags={"environment": "Production"},
        )

        scale_set = build_scale_set(args)

        assert scale_set.zones == ["1", "2"]
        assert scale_set.zone_balance is True
        assert scale_set.platform_fault_domain_count == 2
        assert scale_set.proximity_placement_group.id == proximity_id
        assert scale_set.additional_capabilities.ultra_ssd_enabled is True
        assert scale_set.tags == {"environment": "Production"}

    def test_build_omits_zero_fault_domain_count(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, platform_fault_domain_count=0)

        assert build_scale_set(args).platform_fault_domain_count is None

    def test_build_enforces_cross_field_rules(self, scale_set_config: dict[str, Any]) -> None:
        args = _args(scale_set_config, zone_balance=True)

        with pytest.raises(ValidationError):
            build_scale_set(args)
