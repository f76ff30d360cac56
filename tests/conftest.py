"""
Shared test fixtures and configuration for entire test suite.

Provides: sample configuration, parsed args, Azure IDs, remote scale set
responses and a mocked compute client
Dependencies: pytest, azure-mgmt-compute
System role: Test infrastructure and fixture management
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from azure.mgmt.compute.models import VirtualMachineScaleSet

from vmss.boundary.azure.compute_client import ScaleSetComputeClient
from vmss.core.mapping import build_scale_set
from vmss.models.scale_set import LinuxVirtualMachineScaleSetArgs

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"
RESOURCE_GROUP = "example-resources"
SCALE_SET_NAME = "example-vmss"
SCALE_SET_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{RESOURCE_GROUP}"
    f"/providers/Microsoft.Compute/virtualMachineScaleSets/{SCALE_SET_NAME}"
)
SUBNET_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{RESOURCE_GROUP}"
    "/providers/Microsoft.Network/virtualNetworks/example-network/subnets/internal"
)
HEALTH_PROBE_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{RESOURCE_GROUP}"
    "/providers/Microsoft.Network/loadBalancers/example-lb/probes/http"
)
IMAGE_ID = (
    f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{RESOURCE_GROUP}"
    "/providers/Microsoft.Compute/images/example-image"
)
UNIQUE_ID = "7ab6a3f0-2d31-4a54-9c3b-5a4f2b6d8e11"
SSH_PUBLIC_KEY = "ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQC+example adminuser@example"


@pytest.fixture
def scale_set_config() -> dict[str, Any]:
    """Provide a minimal valid scale set configuration."""
    return {
        "name": SCALE_SET_NAME,
        "resource_group_name": RESOURCE_GROUP,
        "location": "West Europe",
        "sku": "Standard_F2",
        "instances": 2,
        "admin_username": "adminuser",
        "admin_ssh_key": [{"username": "adminuser", "public_key": SSH_PUBLIC_KEY}],
        "network_interface": [{
            "name": "example",
            "primary": True,
            "ip_configuration": [{
                "name": "internal",
                "primary": True,
                "subnet_id": SUBNET_ID,
            }],
        }],
        "os_disk": {
            "caching": "ReadWrite",
            "storage_account_type": "Standard_LRS",
        },
        "source_image_reference": {
            "publisher": "Canonical",
            "offer": "UbuntuServer",
            "sku": "16.04-LTS",
            "version": "latest",
        },
    }


@pytest.fixture
def scale_set_args(scale_set_config: dict[str, Any]) -> LinuxVirtualMachineScaleSetArgs:
    """Provide parsed scale set configuration."""
    return LinuxVirtualMachineScaleSetArgs.model_validate(scale_set_config)


@pytest.fixture
def remote_scale_set(scale_set_args: LinuxVirtualMachineScaleSetArgs) -> VirtualMachineScaleSet:
    """Provide a scale set as the API would return it after creation."""
    scale_set = build_scale_set(scale_set_args)
    scale_set.id = SCALE_SET_ID
    scale_set.unique_id = UNIQUE_ID
    return scale_set


@pytest.fixture
def mock_compute_client() -> MagicMock:
    """Provide mock scale set compute client."""
    return MagicMock(spec=ScaleSetComputeClient)


@pytest.fixture
def scale_set_id() -> str:
    """Provide the scale set resource ID."""
    return SCALE_SET_ID


@pytest.fixture
def subnet_id() -> str:
    """Provide a subnet resource ID."""
    return SUBNET_ID


@pytest.fixture
def health_probe_id() -> str:
    """Provide a load balancer health probe resource ID."""
    return HEALTH_PROBE_ID


@pytest.fixture
def image_id() -> str:
    """Provide a custom image resource ID."""
    return IMAGE_ID
