"""
Azure resource ID parsing.

IDs have the shape
/subscriptions/{sub}/resourceGroups/{rg}/providers/{namespace}/{type}/{name}...

Dependencies: None
System role: Turn orchestrator-held IDs into (subscription, group, name)
"""

from dataclasses import dataclass, field

from vmss.core.exceptions import ResourceIdParseError

SCALE_SET_PROVIDER = "Microsoft.Compute"
SCALE_SET_TYPE = "virtualMachineScaleSets"


@dataclass(frozen=True)
class ResourceId:
    """Parsed generic Azure resource ID."""
    subscription_id: str
    resource_group: str
    provider: str | None = None
    path: dict[str, str] = field(default_factory=dict)


def parse_resource_id(resource_id: str) -> ResourceId:
    """
    Parse an Azure resource ID into its key/value segments.

    Args:
        resource_id: Full resource ID

    Returns:
        ResourceId: Subscription, resource group, provider and remaining path

    Raises:
        ResourceIdParseError: If the ID is malformed
    """
    trimmed = resource_id.strip("/")
    if not trimmed:
        raise ResourceIdParseError(resource_id, "ID was empty")

    components = trimmed.split("/")
    if len(components) % 2 != 0:
        raise ResourceIdParseError(resource_id, "number of path segments is not divisible by 2")

    pairs: dict[str, str] = {}
    for key, value in zip(components[::2], components[1::2]):
        if not key or not value:
            raise ResourceIdParseError(resource_id, f"key/value pair ({key!r}, {value!r}) is empty")
        pairs[key] = value

    subscription_id = pairs.pop("subscriptions", None)
    if not subscription_id:
        raise ResourceIdParseError(resource_id, "no subscription ID found")

    resource_group = pairs.pop("resourceGroups", None) or pairs.pop("resourcegroups", None)
    if not resource_group:
        raise ResourceIdParseError(resource_id, "no resource group name found")

    provider = pairs.pop("providers", None)

    return ResourceId(
        subscription_id=subscription_id,
        resource_group=resource_group,
        provider=provider,
        path=pairs,
    )


@dataclass(frozen=True)
class ScaleSetId:
    """Parsed ID of a virtual machine scale set."""
    subscription_id: str
    resource_group: str
    name: str

    @classmethod
    def parse(cls, resource_id: str) -> "ScaleSetId":
        """
        Parse a scale set ID.

        Raises:
            ResourceIdParseError: If the ID is malformed or not a scale set ID
        """
        parsed = parse_resource_id(resource_id)
        name = parsed.path.get(SCALE_SET_TYPE)
        if not name:
            raise ResourceIdParseError(resource_id, f"no `{SCALE_SET_TYPE}` segment found")
        return cls(
            subscription_id=parsed.subscription_id,
            resource_group=parsed.resource_group,
            name=name,
        )

    def __str__(self) -> str:
        return (
            f"/subscriptions/{self.subscription_id}/resourceGroups/{self.resource_group}"
            f"/providers/{SCALE_SET_PROVIDER}/{SCALE_SET_TYPE}/{self.name}"
        )
