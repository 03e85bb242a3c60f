"""Exceptions raised for configuration and host-side problems.

Per-file conversion problems are never raised; they come back as a failed
``ConversionResult``.
"""


class LiteVideoError(Exception):
    """Base class for all litevideo errors."""


class ConfigError(LiteVideoError):
    """A configuration value could not be parsed."""


class ManifestError(LiteVideoError):
    """The media manifest is unreadable or references an unknown attachment."""
