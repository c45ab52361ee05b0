"""
Asset storage for assetdb.

Provides a per-user async asset store with pluggable payload compression,
JSON metadata sidecars, and codec detection on read.
"""

from .base import (
    AssetMetadata,
    AssetNotFoundError,
    AssetStore,
    AssetSummary,
    AssetValidationError,
    DecompressionError,
    InvalidAssetIdError,
    InvalidMetadataError,
    StorageError,
    StoredScreenshot,
    UnsupportedAssetTypeError,
    new_asset_id,
)
from .compression import (
    CompressionType,
    clamp_level,
    compress_bytes,
    decompress_bytes,
    detect_compression,
    estimate_compression_ratio,
)
from .content_types import (
    IMAGE_ASSET_TYPES,
    SUPPORTED_ASSET_TYPES,
    SUPPORTED_BOOKMARK_ASSET_TYPES,
    SUPPORTED_UPLOAD_ASSET_TYPES,
    AssetType,
    is_supported,
)
from .local import LocalAssetStore

__all__ = [
    "IMAGE_ASSET_TYPES",
    "SUPPORTED_ASSET_TYPES",
    "SUPPORTED_BOOKMARK_ASSET_TYPES",
    "SUPPORTED_UPLOAD_ASSET_TYPES",
    "AssetMetadata",
    "AssetNotFoundError",
    "AssetStore",
    "AssetSummary",
    "AssetType",
    "AssetValidationError",
    "CompressionType",
    "DecompressionError",
    "InvalidAssetIdError",
    "InvalidMetadataError",
    "LocalAssetStore",
    "StorageError",
    "StoredScreenshot",
    "UnsupportedAssetTypeError",
    "clamp_level",
    "compress_bytes",
    "decompress_bytes",
    "detect_compression",
    "estimate_compression_ratio",
    "is_supported",
    "new_asset_id",
]
