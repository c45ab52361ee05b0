"""assetdb: per-user, compression-transparent asset storage."""

__version__ = "0.1.0"
