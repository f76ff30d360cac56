"""Additional capabilities mapping."""

from typing import Any

from azure.mgmt.compute.models import AdditionalCapabilities

from vmss.models.scale_set import AdditionalCapabilities as AdditionalCapabilitiesBlock


def expand_additional_capabilities(
    capabilities: AdditionalCapabilitiesBlock | None,
) -> AdditionalCapabilities:
    # The block is always sent; the flag only when configured
    if capabilities is None:
        return AdditionalCapabilities()
    return AdditionalCapabilities(ultra_ssd_enabled=capabilities.ultra_ssd_enabled)


def flatten_additional_capabilities(
    capabilities: AdditionalCapabilities | None,
) -> dict[str, Any] | None:
    if capabilities is None:
        return None
    return {"ultra_ssd_enabled": bool(capabilities.ultra_ssd_enabled)}
