"""
Infrastructure primitives.

Logging setup and the exception types shared by the configuration
loader and the data model.

No toolchain logic.
"""
