"""
Linux virtual machine scale set resource handler.

Reconciles a flat, declarative scale set configuration with the Azure compute
API:
- configs: settings for Azure credentials, feature flags and timeouts
- models: flat configuration schema
- core: validation, resource IDs and expand/flatten mapping
- boundary: Azure compute SDK wrapper
- application: Create/Read/Update/Delete lifecycle service
"""
