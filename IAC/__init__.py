"""
Pulumi infrastructure-as-code for Linux virtual machine scale sets.

This package binds the vmss lifecycle service to Pulumi:
- a dynamic provider and resource for the scale set
- a component that wires stack configuration into the resource
- the program entry point in __main__
"""
