"""
Long-running operation timeouts.

Dependencies: pydantic_settings
System role: Upper bounds for blocking waits on Azure pollers
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimeoutSettings(BaseSettings):
    """Per-operation wait limits in minutes."""

    model_config = SettingsConfigDict(
        env_prefix="TIMEOUTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    create: int = Field(default=60, ge=1, description="Minutes to wait for creation")
    update: int = Field(default=60, ge=1, description="Minutes to wait for an update")
    delete: int = Field(default=60, ge=1, description="Minutes to wait for deletion")

    def seconds(self, operation: str) -> float:
        """
        Get the wait limit for an operation in seconds.

        Args:
            operation: One of create, update, delete

        Returns:
            float: Timeout in seconds
        """
        return getattr(self, operation) * 60.0
