"""
Boundary layer for external system integrations.

Handles all interactions with the Azure Resource Manager APIs.
"""
