"""Content types the store accepts, and the allow-lists built from them."""

from enum import Enum


class AssetType(str, Enum):
    """MIME types known to the asset store."""

    IMAGE_JPEG = "image/jpeg"
    IMAGE_PNG = "image/png"
    IMAGE_WEBP = "image/webp"
    APPLICATION_PDF = "application/pdf"
    TEXT_HTML = "text/html"
    VIDEO_MP4 = "video/mp4"


IMAGE_ASSET_TYPES: frozenset[str] = frozenset(
    {
        AssetType.IMAGE_JPEG.value,
        AssetType.IMAGE_PNG.value,
        AssetType.IMAGE_WEBP.value,
    }
)

# What users may upload directly
SUPPORTED_UPLOAD_ASSET_TYPES: frozenset[str] = IMAGE_ASSET_TYPES | {
    AssetType.APPLICATION_PDF.value,
}

# What may back a bookmark of type "asset"
SUPPORTED_BOOKMARK_ASSET_TYPES: frozenset[str] = IMAGE_ASSET_TYPES | {
    AssetType.APPLICATION_PDF.value,
}

# Everything the store will persist
SUPPORTED_ASSET_TYPES: frozenset[str] = SUPPORTED_UPLOAD_ASSET_TYPES | {
    AssetType.TEXT_HTML.value,
    AssetType.VIDEO_MP4.value,
}


def is_supported(content_type: str, allowed: frozenset[str] = SUPPORTED_ASSET_TYPES) -> bool:
    return content_type in allowed
