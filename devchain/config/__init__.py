"""
Runtime settings for the loader.

The toolchain artifact itself reads no environment; these settings only
decide where load_config() looks and how the CLI logs.
"""

from .runtime import RuntimeConfig

__all__ = ["RuntimeConfig"]
