"""
Upgrade policy mapping.

Dependencies: azure-mgmt-compute
System role: automatic/rolling upgrade policy blocks <-> upgradePolicy
"""

from typing import Any

from azure.mgmt.compute.models import AutomaticOSUpgradePolicy, RollingUpgradePolicy

from vmss.models.scale_set import (
    AutomaticOSUpgradePolicy as AutomaticOSUpgradePolicyBlock,
    RollingUpgradePolicy as RollingUpgradePolicyBlock,
)


def expand_automatic_os_upgrade_policy(
    policy: AutomaticOSUpgradePolicyBlock | None,
) -> AutomaticOSUpgradePolicy | None:
    if policy is None:
        return None
    return AutomaticOSUpgradePolicy(
        disable_automatic_rollback=policy.disable_automatic_rollback,
        enable_automatic_os_upgrade=policy.enable_automatic_os_upgrade,
    )


def expand_rolling_upgrade_policy(
    policy: RollingUpgradePolicyBlock | None,
) -> RollingUpgradePolicy | None:
    """The health probe is not part of the SDK policy; it goes on the network profile."""
    if policy is None:
        return None
    return RollingUpgradePolicy(
        max_batch_instance_percent=policy.max_batch_instance_percent,
        max_unhealthy_instance_percent=policy.max_unhealthy_instance_percent,
        max_unhealthy_upgraded_instance_percent=policy.max_unhealthy_upgraded_instance_percent,
        pause_time_between_batches=policy.pause_time_between_batches,
    )


def flatten_automatic_os_upgrade_policy(
    policy: AutomaticOSUpgradePolicy | None,
) -> dict[str, Any] | None:
    if policy is None:
        return None
    return {
        "disable_automatic_rollback": bool(policy.disable_automatic_rollback),
        "enable_automatic_os_upgrade": bool(policy.enable_automatic_os_upgrade),
    }


def flatten_rolling_upgrade_policy(
    policy: RollingUpgradePolicy | None,
    health_probe_id: str | None,
) -> dict[str, Any] | None:
    if policy is None:
        return None
    return {
        "max_batch_instance_percent": policy.max_batch_instance_percent,
        "max_unhealthy_instance_percent": policy.max_unhealthy_instance_percent,
        "max_unhealthy_upgraded_instance_percent": policy.max_unhealthy_upgraded_instance_percent,
        "pause_time_between_batches": policy.pause_time_between_batches,
        "health_probe_id": health_probe_id or "",
    }
