"""
Azure Resource Manager configuration.

Credentials and client behaviour for the compute management client.

Dependencies: pydantic_settings
System role: Azure authentication and polling configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureSettings(BaseSettings):
    """Settings for the Azure compute management client."""

    model_config = SettingsConfigDict(
        env_prefix="AZURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    subscription_id: str = Field(
        default="",
        description="Subscription that owns the scale sets",
    )
    tenant_id: str | None = Field(
        default=None,
        description="Azure AD tenant for service principal authentication",
    )
    client_id: str | None = Field(
        default=None,
        description="Service principal application ID",
    )
    client_secret: str | None = Field(
        default=None,
        description="Service principal secret (DefaultAzureCredential is used when unset)",
    )
    resource_manager_url: str = Field(
        default="https://management.azure.com",
        description="Azure Resource Manager endpoint",
    )
    polling_interval: int = Field(
        default=15,
        ge=1,
        description="Seconds between long-running operation status checks",
    )
    throttle_retry_attempts: int = Field(
        default=5,
        ge=1,
        description="Attempts for reads that are throttled with HTTP 429",
    )

    @property
    def uses_client_secret(self) -> bool:
        """Check whether a full service principal is configured."""
        return bool(self.tenant_id and self.client_id and self.client_secret)
