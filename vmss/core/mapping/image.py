"""
Source image mapping.

Dependencies: azure-mgmt-compute
System role: source_image_reference / source_image_id <-> storageProfile.imageReference
"""

from typing import Any

from azure.mgmt.compute.models import ImageReference

from vmss.models.scale_set import SourceImageReference


def expand_source_image_reference(
    reference: SourceImageReference | None,
) -> ImageReference | None:
    if reference is None:
        return None
    return ImageReference(
        publisher=reference.publisher,
        offer=reference.offer,
        sku=reference.sku,
        version=reference.version,
    )


def flatten_source_image_reference(reference: ImageReference | None) -> dict[str, Any] | None:
    """Marketplace references carry a publisher; custom image IDs do not."""
    if reference is None or not reference.publisher:
        return None
    return {
        "publisher": reference.publisher,
        "offer": reference.offer,
        "sku": reference.sku,
        "version": reference.version,
    }


def flatten_source_image_id(reference: ImageReference | None) -> str:
    if reference is None or not reference.id:
        return ""
    return reference.id
