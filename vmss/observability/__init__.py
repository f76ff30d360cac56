"""
Observability module.

Provides logging configuration for the handler and the Pulumi provider process.
"""

from vmss.observability.logger import configure_logging

__all__ = ["configure_logging"]
