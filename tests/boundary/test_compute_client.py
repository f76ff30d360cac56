"""
Test suite for ScaleSetComputeClient.

Tests not-found handling, throttling retries, poller waits and client
construction from settings. The Azure SDK client is mocked.

System role: Verification of the remote API boundary
"""

from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import HttpResponseError, ResourceNotFoundError
from tenacity import wait_none

from vmss.boundary.azure.compute_client import ScaleSetComputeClient, create_compute_client
from vmss.configs.azure import AzureSettings
from vmss.core.exceptions import OperationTimeoutError, ValidationError


def _http_error(status_code: int, message: str = "request failed") -> HttpResponseError:
    error = HttpResponseError(message=message)
    error.status_code = status_code
    return error


@pytest.fixture
def mock_sdk_client() -> MagicMock:
    """Provide mock ComputeManagementClient."""
    return MagicMock()


@pytest.fixture
def scale_set_sets(mock_sdk_client: MagicMock) -> MagicMock:
    """Provide the mocked virtual_machine_scale_sets operations group."""
    return mock_sdk_client.virtual_machine_scale_sets


@pytest.fixture
def client(mock_sdk_client: MagicMock) -> ScaleSetComputeClient:
    """Provide client with no back-off between retries."""
    return ScaleSetComputeClient(
        mock_sdk_client,
        polling_interval=5,
        throttle_retry_attempts=3,
        throttle_wait=wait_none(),
    )


class TestGet:
    """Test suite for ScaleSetComputeClient.get."""

    def test_get_returns_scale_set(self, client: ScaleSetComputeClient, scale_set_sets: MagicMock) -> None:
        """Test the SDK response is returned as is."""
        # Arrange
        remote = MagicMock()
        scale_set_sets.get.return_value = remote

        # Act
        result = client.get("example-resources", "example-vmss")

        # Assert
        assert result is remote
        scale_set_sets.get.assert_called_once_with("example-resources", "example-vmss")

    def test_get_not_found_returns_none(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        """Test a 404 is reported as absence, not an error."""
        scale_set_sets.get.side_effect = ResourceNotFoundError(message="not found")

        assert client.get("example-resources", "example-vmss") is None

    def test_get_retries_when_throttled(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        """Test HTTP 429 responses are retried."""
        # Arrange
        remote = MagicMock()
        scale_set_sets.get.side_effect = [_http_error(429, "throttled"), remote]

        # Act
        result = client.get("example-resources", "example-vmss")

        # Assert
        assert result is remote
        assert scale_set_sets.get.call_count == 2

    def test_get_gives_up_after_max_attempts(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        """Test the last throttling error is re-raised."""
        scale_set_sets.get.side_effect = _http_error(429, "throttled")

        with pytest.raises(HttpResponseError, match="throttled"):
            client.get("example-resources", "example-vmss")

        assert scale_set_sets.get.call_count == 3

    def test_get_does_not_retry_other_errors(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        scale_set_sets.get.side_effect = _http_error(500, "internal error")

        with pytest.raises(HttpResponseError, match="internal error"):
            client.get("example-resources", "example-vmss")

        assert scale_set_sets.get.call_count == 1


class TestLongRunningOperations:
    """Test suite for begin_* calls and waiting on pollers."""

    def test_begin_create_or_update_passes_polling_interval(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        parameters = MagicMock()

        poller = client.begin_create_or_update("example-resources", "example-vmss", parameters)

        assert poller is scale_set_sets.begin_create_or_update.return_value
        scale_set_sets.begin_create_or_update.assert_called_once_with(
            "example-resources", "example-vmss", parameters, polling_interval=5
        )

    def test_begin_delete_passes_polling_interval(
        self, client: ScaleSetComputeClient, scale_set_sets: MagicMock
    ) -> None:
        poller = client.begin_delete("example-resources", "example-vmss")

        assert poller is scale_set_sets.begin_delete.return_value
        scale_set_sets.begin_delete.assert_called_once_with(
            "example-resources", "example-vmss", polling_interval=5
        )

    def test_wait_returns_result_when_done(self) -> None:
        """Test a finished poller yields its result."""
        # Arrange
        poller = MagicMock()
        poller.done.return_value = True

        # Act
        result = ScaleSetComputeClient.wait(poller, "create of 'example-vmss'", 60.0)

        # Assert
        poller.wait.assert_called_once_with(60.0)
        assert result is poller.result.return_value

    def test_wait_raises_when_still_running(self) -> None:
        """Test a poller still running after the timeout raises."""
        poller = MagicMock()
        poller.done.return_value = False

        with pytest.raises(OperationTimeoutError, match="timed out after 60s") as exc_info:
            ScaleSetComputeClient.wait(poller, "create of 'example-vmss'", 60.0)

        assert exc_info.value.operation == "create of 'example-vmss'"
        poller.result.assert_not_called()

    def test_wait_propagates_operation_failure(self) -> None:
        poller = MagicMock()
        poller.done.return_value = True
        poller.result.side_effect = _http_error(409, "conflict")

        with pytest.raises(HttpResponseError, match="conflict"):
            ScaleSetComputeClient.wait(poller, "delete of 'example-vmss'", 60.0)


class TestCreateComputeClient:
    """Test suite for building the client from settings."""

    def test_missing_subscription_should_raise(self) -> None:
        settings = AzureSettings(subscription_id="")

        with pytest.raises(ValidationError, match="AZURE_SUBSCRIPTION_ID") as exc_info:
            create_compute_client(settings)

        assert exc_info.value.field == "subscription_id"

    @patch("vmss.boundary.azure.compute_client.ComputeManagementClient")
    @patch("vmss.boundary.azure.compute_client.ClientSecretCredential")
    def test_service_principal_uses_client_secret_credential(
        self, mock_credential: MagicMock, mock_management_client: MagicMock
    ) -> None:
        """Test a full service principal selects ClientSecretCredential."""
        # Arrange
        settings = AzureSettings(
            subscription_id="sub",
            tenant_id="tenant",
            client_id="client",
            client_secret="secret",
            polling_interval=7,
        )

        # Act
        client = create_compute_client(settings)

        # Assert
        mock_credential.assert_called_once_with(
            tenant_id="tenant", client_id="client", client_secret="secret"
        )
        mock_management_client.assert_called_once_with(
            mock_credential.return_value,
            "sub",
            base_url="https://management.azure.com",
            credential_scopes=["https://management.azure.com/.default"],
        )
        assert isinstance(client, ScaleSetComputeClient)
        assert client.subscription_id == "sub"

    @patch("vmss.boundary.azure.compute_client.ComputeManagementClient")
    @patch("vmss.boundary.azure.compute_client.DefaultAzureCredential")
    def test_without_secret_uses_default_credential(
        self, mock_credential: MagicMock, mock_management_client: MagicMock
    ) -> None:
        settings = AzureSettings(
            subscription_id="sub",
            tenant_id=None,
            client_id=None,
            client_secret=None,
            resource_manager_url="https://management.usgovcloudapi.net/",
        )

        create_compute_client(settings)

        mock_credential.assert_called_once_with()
        mock_management_client.assert_called_once_with(
            mock_credential.return_value,
            "sub",
            base_url="https://management.usgovcloudapi.net",
            credential_scopes=["https://management.usgovcloudapi.net/.default"],
        )
