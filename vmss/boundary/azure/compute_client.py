"""
Compute client for virtual machine scale set operations.

Wraps ComputeManagementClient.virtual_machine_scale_sets: Get maps "not found"
to None, CreateOrUpdate and Delete return pollers, and wait() blocks on a
poller with an upper bound.

Dependencies: azure-mgmt-compute, azure-identity, azure-core, tenacity
System role: Remote API surface consumed by the lifecycle service
"""

import logging
from typing import Any

from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from azure.core.polling import LROPoller
from azure.identity import ClientSecretCredential, DefaultAzureCredential
from azure.mgmt.compute import ComputeManagementClient
from azure.mgmt.compute.models import VirtualMachineScaleSet
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from vmss.configs.azure import AzureSettings
from vmss.core.exceptions import OperationTimeoutError, ValidationError

logger = logging.getLogger(__name__)


def _is_throttled(exc: BaseException) -> bool:
    return isinstance(exc, HttpResponseError) and exc.status_code == 429


class ScaleSetComputeClient:
    """Scale set operations against the Azure compute API."""

    def __init__(
        self,
        compute_client: ComputeManagementClient,
        polling_interval: int = 15,
        throttle_retry_attempts: int = 5,
        throttle_wait: wait_base | None = None,
        subscription_id: str = "",
    ) -> None:
        """
        Initialize the scale set client.

        Args:
            compute_client: Authenticated compute management client
            polling_interval: Seconds between long-running operation polls
            throttle_retry_attempts: Attempts for reads throttled with HTTP 429
            throttle_wait: Back-off between throttled attempts
            subscription_id: Subscription the compute client is bound to
        """
        self._compute_client = compute_client
        self._subscription_id = subscription_id
        self._polling_interval = polling_interval
        self._throttle_retry_attempts = throttle_retry_attempts
        self._throttle_wait = throttle_wait or wait_exponential_jitter(initial=1, max=30, jitter=5)

    @property
    def subscription_id(self) -> str:
        return self._subscription_id

    @property
    def _scale_sets(self) -> Any:
        return self._compute_client.virtual_machine_scale_sets

    def _get_once(self, resource_group: str, name: str) -> VirtualMachineScaleSet | None:
        try:
            return self._scale_sets.get(resource_group, name)
        except ResourceNotFoundError:
            logger.debug(f"{__name__}:get - {name!r} not found in resource group {resource_group!r}")
            return None

    def get(self, resource_group: str, name: str) -> VirtualMachineScaleSet | None:
        """
        Get a scale set.

        Args:
            resource_group: Resource group name
            name: Scale set name

        Returns:
            VirtualMachineScaleSet | None: The scale set, or None if it does not exist

        Raises:
            HttpResponseError: For any failure other than "not found"
        """
        retrying = Retrying(
            retry=retry_if_exception(_is_throttled),
            stop=stop_after_attempt(self._throttle_retry_attempts),
            wait=self._throttle_wait,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:get - Retry {retry_state.attempt_number}/"
                f"{self._throttle_retry_attempts} after throttling"
            ),
            reraise=True,
        )
        return retrying(self._get_once, resource_group, name)

    def begin_create_or_update(
        self,
        resource_group: str,
        name: str,
        parameters: VirtualMachineScaleSet,
    ) -> LROPoller:
        """
        Start creating or replacing a scale set.

        Returns:
            LROPoller: Poller for the long-running operation

        Raises:
            HttpResponseError: If the request is rejected
        """
        return self._scale_sets.begin_create_or_update(
            resource_group,
            name,
            parameters,
            polling_interval=self._polling_interval,
        )

    def begin_delete(self, resource_group: str, name: str) -> LROPoller:
        """
        Start deleting a scale set.

        Returns:
            LROPoller: Poller for the long-running operation

        Raises:
            HttpResponseError: If the request is rejected
        """
        return self._scale_sets.begin_delete(
            resource_group,
            name,
            polling_interval=self._polling_interval,
        )

    @staticmethod
    def wait(poller: LROPoller, operation: str, timeout: float | None = None) -> Any:
        """
        Block until a long-running operation finishes.

        Args:
            poller: Poller returned by a begin_* call
            operation: Description used in timeout errors
            timeout: Seconds to wait, None for no limit

        Returns:
            Any: Final operation result

        Raises:
            OperationTimeoutError: If the operation is still running after timeout
            HttpResponseError: If the operation finished in a failed state
        """
        poller.wait(timeout)
        if not poller.done():
            raise OperationTimeoutError(operation, timeout or 0)
        return poller.result()


def create_compute_client(settings: AzureSettings) -> ScaleSetComputeClient:
    """
    Build a scale set client from settings.

    Uses a client-secret credential when a full service principal is
    configured and DefaultAzureCredential otherwise.

    Args:
        settings: Azure settings

    Returns:
        ScaleSetComputeClient: Ready-to-use client

    Raises:
        ValidationError: If no subscription ID is configured
    """
    if not settings.subscription_id:
        raise ValidationError(
            "AZURE_SUBSCRIPTION_ID must be set to manage scale sets",
            field="subscription_id",
        )

    if settings.uses_client_secret:
        credential = ClientSecretCredential(
            tenant_id=settings.tenant_id,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
        )
    else:
        credential = DefaultAzureCredential()

    endpoint = settings.resource_manager_url.rstrip("/")
    compute_client = ComputeManagementClient(
        credential,
        settings.subscription_id,
        base_url=endpoint,
        credential_scopes=[f"{endpoint}/.default"],
    )
    return ScaleSetComputeClient(
        compute_client,
        polling_interval=settings.polling_interval,
        throttle_retry_attempts=settings.throttle_retry_attempts,
        subscription_id=settings.subscription_id,
    )
