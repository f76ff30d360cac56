"""
Pulumi program entry point for scale set infrastructure.

Instantiates resources in dependency order:
1. Configuration
2. Linux virtual machine scale set in an existing subnet
"""

import pulumi

from IAC.configs.environment import get_config
from IAC.utils.naming import ResourceNamer

# Compute
from IAC.components.compute.linux_scale_set import LinuxScaleSetComponent


def main() -> None:
    """Deploy the scale set."""
    # Load configuration
    config = get_config()
    namer = ResourceNamer(project="linux-vmss", environment=config.environment)

    pulumi_config = pulumi.Config()
    subnet_id = pulumi_config.require("subnet_id")
    health_probe_id = pulumi_config.get("health_probe_id")

    scale_set = LinuxScaleSetComponent(
        name=namer.name("web"),
        config=config,
        subnet_id=subnet_id,
        health_probe_id=health_probe_id,
        computer_name_prefix=namer.computer_name_prefix("web"),
    )
    outputs = scale_set.get_outputs()

    # --- Exports ---
    pulumi.export("scale_set_id", outputs.scale_set_id)
    pulumi.export("unique_id", outputs.unique_id)


# Execute
main()
