"""
Pulumi component resources for scale set infrastructure.

Each submodule provides reusable resource classes:
- compute: Linux virtual machine scale set (dynamic provider and component)
"""
