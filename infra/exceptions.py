"""
Custom exceptions for configuration errors.
"""


class ConfigError(RuntimeError):
    """Base error for configuration handling."""
    pass


class ConfigLoadError(ConfigError):
    """Configuration source is missing, unreadable or malformed."""
    pass


class UnsupportedFormatError(ConfigLoadError):
    """Configuration file suffix or format name is not supported."""
    pass


class ConfigDumpError(ConfigError):
    """Configuration holds values JSON or YAML cannot represent."""
    pass


class NetworkNotFoundError(ConfigError, LookupError):
    """Requested network profile is not defined."""
    pass


class CompilerNotFoundError(ConfigError, LookupError):
    """Requested compiler is not defined."""
    pass


class InvalidVersionError(ValueError):
    """Version string is not a valid semantic version."""
    pass


class InvalidRangeError(ValueError):
    """Version range expression cannot be parsed."""
    pass


class NoMatchingVersionError(LookupError):
    """No candidate version satisfies the range."""
    pass
