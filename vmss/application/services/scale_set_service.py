"""
Linux virtual machine scale set lifecycle service.

Create, Read, Update and Delete invoked by the declarative engine. Each
operation is a short, sequential chain of remote calls; every remote failure
is wrapped with the scale set name and resource group, and "not found" on
Read means the scale set is gone rather than an error.

Dependencies: vmss.boundary.azure, vmss.core.mapping, vmss.configs
System role: Scale set use case orchestration
"""

import logging

from azure.core.exceptions import AzureError
from azure.core.polling import LROPoller

from vmss.boundary.azure.compute_client import ScaleSetComputeClient, create_compute_client
from vmss.configs.features import FeatureSettings
from vmss.configs.settings import Settings, get_settings
from vmss.configs.timeouts import TimeoutSettings
from vmss.core.exceptions import (
    OperationTimeoutError,
    ResourceAlreadyExistsError,
    ScaleSetOperationError,
    ValidationError,
)
from vmss.core.mapping import ScaleSetState, build_scale_set, flatten_scale_set
from vmss.core.resource_id import ScaleSetId
from vmss.models.scale_set import LinuxVirtualMachineScaleSetArgs

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "linux_virtual_machine_scale_set"


class LinuxVirtualMachineScaleSetService:
    """Lifecycle orchestrator for Linux virtual machine scale sets."""

    def __init__(
        self,
        client: ScaleSetComputeClient,
        features: FeatureSettings | None = None,
        timeouts: TimeoutSettings | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            client: Scale set compute client
            features: Feature flags (defaults from environment)
            timeouts: Long-running operation limits (defaults from environment)
        """
        self.client = client
        self.features = features or FeatureSettings()
        self.timeouts = timeouts or TimeoutSettings()

    def _wait(
        self,
        poller: LROPoller,
        verb: str,
        operation: str,
        name: str,
        resource_group: str,
    ) -> None:
        try:
            self.client.wait(poller, f"{operation} of {name!r}", self.timeouts.seconds(operation))
        except (AzureError, OperationTimeoutError) as e:
            raise ScaleSetOperationError(verb, name, resource_group, e) from e

    def create(self, args: LinuxVirtualMachineScaleSetArgs) -> ScaleSetState:
        """
        Create a scale set and return its state.

        Args:
            args: Desired configuration

        Returns:
            ScaleSetState: State read back after creation

        Raises:
            ResourceAlreadyExistsError: If import checks are enabled and the scale set exists
            ValidationError: If a cross-field rule is broken
            ScaleSetOperationError: If a remote call fails
        """
        name = args.name
        resource_group = args.resource_group_name

        if self.features.resources_should_be_imported:
            try:
                existing = self.client.get(resource_group, name)
            except AzureError as e:
                raise ScaleSetOperationError(
                    "checking for existing", name, resource_group, e
                ) from e
            if existing is not None:
                existing_id = existing.id or str(
                    ScaleSetId(self.client.subscription_id, resource_group, name)
                )
                raise ResourceAlreadyExistsError(RESOURCE_TYPE, existing_id)

        parameters = build_scale_set(args)

        logger.debug(
            f"{__name__}:create - Creating Linux Virtual Machine Scale Set {name!r} "
            f"(Resource Group {resource_group!r})"
        )
        try:
            poller = self.client.begin_create_or_update(resource_group, name, parameters)
        except AzureError as e:
            raise ScaleSetOperationError("creating", name, resource_group, e) from e

        logger.debug(f"{__name__}:create - Waiting for {name!r} to be created")
        self._wait(poller, "waiting for creation of", "create", name, resource_group)
        logger.debug(f"{__name__}:create - {name!r} was created")

        try:
            created = self.client.get(resource_group, name)
        except AzureError as e:
            raise ScaleSetOperationError("retrieving", name, resource_group, e) from e
        if created is None or not created.id:
            raise ScaleSetOperationError("retrieving", name, resource_group, "ID was nil")

        state = self.read(created.id)
        if state is None:
            raise ScaleSetOperationError(
                "retrieving", name, resource_group, "scale set was not found after creation"
            )
        return state

    def read(self, resource_id: str) -> ScaleSetState | None:
        """
        Read the current state of a scale set.

        Args:
            resource_id: Scale set resource ID

        Returns:
            ScaleSetState | None: Current state, or None if the scale set no longer exists

        Raises:
            ResourceIdParseError: If the ID is malformed
            ScaleSetOperationError: If the remote call fails
            FlattenError: If the response cannot be mapped onto the schema
        """
        scale_set_id = ScaleSetId.parse(resource_id)
        name = scale_set_id.name
        resource_group = scale_set_id.resource_group

        try:
            scale_set = self.client.get(resource_group, name)
        except AzureError as e:
            raise ScaleSetOperationError("retrieving", name, resource_group, e) from e

        if scale_set is None:
            logger.debug(
                f"{__name__}:read - Linux Virtual Machine Scale Set {name!r} was not found in "
                f"Resource Group {resource_group!r} - removing from state"
            )
            return None

        return flatten_scale_set(scale_set, scale_set_id)

    def update(self, resource_id: str, args: LinuxVirtualMachineScaleSetArgs) -> ScaleSetState:
        """
        Apply the desired configuration to an existing scale set.

        The whole request is rebuilt and sent with CreateOrUpdate; the API
        applies the differences.

        Args:
            resource_id: Scale set resource ID
            args: Desired configuration

        Returns:
            ScaleSetState: State read back after the update

        Raises:
            ResourceIdParseError: If the ID is malformed
            ValidationError: If the configuration names a different scale set or breaks a rule
            ScaleSetOperationError: If a remote call fails
        """
        scale_set_id = ScaleSetId.parse(resource_id)
        name = scale_set_id.name
        resource_group = scale_set_id.resource_group

        if args.name.casefold() != name.casefold():
            raise ValidationError(
                f"`name` cannot be changed from {name!r} to {args.name!r} without replacing the scale set",
                field="name",
            )
        if args.resource_group_name.casefold() != resource_group.casefold():
            raise ValidationError(
                f"`resource_group_name` cannot be changed from {resource_group!r} to "
                f"{args.resource_group_name!r} without replacing the scale set",
                field="resource_group_name",
            )

        parameters = build_scale_set(args)

        logger.debug(
            f"{__name__}:update - Updating Linux Virtual Machine Scale Set {name!r} "
            f"(Resource Group {resource_group!r})"
        )
        try:
            poller = self.client.begin_create_or_update(resource_group, name, parameters)
        except AzureError as e:
            raise ScaleSetOperationError("updating", name, resource_group, e) from e

        self._wait(poller, "waiting for update of", "update", name, resource_group)
        logger.debug(f"{__name__}:update - {name!r} was updated")

        state = self.read(resource_id)
        if state is None:
            raise ScaleSetOperationError(
                "retrieving", name, resource_group, "scale set was not found after update"
            )
        return state

    def delete(self, resource_id: str) -> None:
        """
        Delete a scale set and wait for the deletion to finish.

        Args:
            resource_id: Scale set resource ID

        Raises:
            ResourceIdParseError: If the ID is malformed
            ScaleSetOperationError: If a remote call fails
        """
        scale_set_id = ScaleSetId.parse(resource_id)
        name = scale_set_id.name
        resource_group = scale_set_id.resource_group

        logger.debug(
            f"{__name__}:delete - Deleting Linux Virtual Machine Scale Set {name!r} "
            f"(Resource Group {resource_group!r})"
        )
        try:
            poller = self.client.begin_delete(resource_group, name)
        except AzureError as e:
            raise ScaleSetOperationError("deleting", name, resource_group, e) from e

        self._wait(poller, "waiting for deletion of", "delete", name, resource_group)
        logger.debug(f"{__name__}:delete - {name!r} was deleted")

    def import_existing(self, resource_id: str) -> ScaleSetState:
        """
        Adopt an existing scale set by ID.

        Args:
            resource_id: Scale set resource ID

        Returns:
            ScaleSetState: Current state

        Raises:
            ScaleSetOperationError: If the scale set does not exist or cannot be read
        """
        state = self.read(resource_id)
        if state is None:
            scale_set_id = ScaleSetId.parse(resource_id)
            raise ScaleSetOperationError(
                "importing",
                scale_set_id.name,
                scale_set_id.resource_group,
                "scale set does not exist",
            )
        return state


def build_scale_set_service(settings: Settings | None = None) -> LinuxVirtualMachineScaleSetService:
    """
    Build a service wired to Azure from settings.

    Args:
        settings: Settings to use (defaults to the cached environment settings)

    Returns:
        LinuxVirtualMachineScaleSetService: Ready-to-use service
    """
    settings = settings or get_settings()
    return LinuxVirtualMachineScaleSetService(
        client=create_compute_client(settings.azure),
        features=settings.features,
        timeouts=settings.timeouts,
    )
