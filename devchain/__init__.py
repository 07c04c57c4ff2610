"""
Development toolchain configuration.

The artifact lives in ``devchain.truffle_config``; ``devchain.loader``
turns it (or a file of the same shape) into a typed ``ConfigRoot``.
"""

__version__ = "0.1.0"
