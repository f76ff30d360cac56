"""
Unified provider settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the handler
"""

from functools import lru_cache

from vmss.configs.base import BaseSettings
from vmss.configs.azure import AzureSettings
from vmss.configs.features import FeatureSettings
from vmss.configs.timeouts import TimeoutSettings


class Settings(BaseSettings):
    """Unified settings aggregating all config modules."""

    # Aggregated settings
    azure: AzureSettings = AzureSettings()
    features: FeatureSettings = FeatureSettings()
    timeouts: TimeoutSettings = TimeoutSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Environment variables are loaded once per process.

    Returns:
        Settings: Provider settings instance

    Usage:
        from vmss.configs import get_settings
        settings = get_settings()
    """
    return Settings()
