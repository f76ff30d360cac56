"""
Application layer.

Use-case orchestration for the scale set resource lifecycle.
"""
