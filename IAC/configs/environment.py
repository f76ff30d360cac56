"""
Environment configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from IAC.configs.base import EnvironmentConfig
from IAC.configs.constants import INSTANCE_COUNTS, VM_SKUS


def get_config() -> EnvironmentConfig:
    """
    Load environment configuration from Pulumi stack config.

    Returns:
        EnvironmentConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
    """
    config = pulumi.Config()
    environment = config.require("environment")

    return EnvironmentConfig(
        environment=environment,
        location=config.require("location"),
        resource_group_name=config.require("resource_group_name"),
        vm_sku=config.get("vm_sku") or VM_SKUS.get(environment, VM_SKUS["dev"]),
        instances=config.get_int("instances") or INSTANCE_COUNTS.get(environment, 1),
        admin_username=config.get("admin_username") or "azureuser",
        ssh_public_key=config.require("ssh_public_key"),
        upgrade_mode=config.get("upgrade_mode") or "Manual",
        zones=tuple(config.get_object("zones") or ()),
    )
