"""
Provider feature flags.

Dependencies: pydantic_settings
System role: Behaviour switches for the lifecycle service
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class FeatureSettings(BaseSettings):
    """Feature flags for resource handling."""

    resources_should_be_imported: bool = Field(
        default=False,
        description="Refuse to create a scale set that already exists and require an import instead",
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "FEATURES_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
