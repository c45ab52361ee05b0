"""
assetdb exception hierarchy.

All assetdb exceptions inherit from AssetDBError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
Storage-specific errors live in ``assetdb.core.storage.base``.
"""


class AssetDBError(Exception):
    """Base exception class for all assetdb errors."""


class ConfigurationError(AssetDBError):
    """Raised for configuration errors (missing keys, invalid values)."""
