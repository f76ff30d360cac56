"""
Azure boundary modules.

Exports: ScaleSetComputeClient, create_compute_client
"""

from .compute_client import ScaleSetComputeClient, create_compute_client

__all__ = ["ScaleSetComputeClient", "create_compute_client"]
