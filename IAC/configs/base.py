"""
Base configuration dataclass for environment settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Environment-specific configuration for the scale set deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        location: Azure region
        resource_group_name: Existing resource group for the scale set
        vm_sku: VM size of each instance
        instances: Initial instance count
        admin_username: Login user created on every instance
        ssh_public_key: Public key installed for admin_username
        upgrade_mode: Manual, Automatic or Rolling
        zones: Availability zones to spread instances across
    """
    environment: str
    location: str
    resource_group_name: str
    vm_sku: str
    instances: int
    admin_username: str
    ssh_public_key: str
    upgrade_mode: str = "Manual"
    zones: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"
