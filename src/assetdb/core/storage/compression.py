"""
Codec registry for asset payloads.

Writes pick a codec from configuration; reads never do. Every payload
carries its own codec evidence in its leading bytes, so detection works on
files written under any earlier configuration.
"""

from __future__ import annotations

import gzip
from enum import Enum
from io import BytesIO

import lz4.frame
import zstandard as zstd
from loguru import logger

from .base import DecompressionError


class CompressionType(Enum):
    """Supported compression types."""

    NONE = "none"
    ZSTD = "zstd"
    LZ4 = "lz4"
    GZIP = "gzip"

    @classmethod
    def parse(cls, name: str | CompressionType | None) -> CompressionType:
        """Map a configured codec name to a type; anything unknown means no compression."""
        if isinstance(name, CompressionType):
            return name
        if not name:
            return cls.NONE
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.NONE


SUFFIXES: dict[CompressionType, str] = {
    CompressionType.NONE: "",
    CompressionType.ZSTD: ".zst",
    CompressionType.LZ4: ".lz4",
    CompressionType.GZIP: ".gz",
}

# Checked in this order; prefixes are disjoint, so order only matters if a new
# signature overlaps an existing one.
SIGNATURES: tuple[tuple[CompressionType, bytes], ...] = (
    (CompressionType.ZSTD, bytes([0x28, 0xB5, 0x2F, 0xFD])),
    (CompressionType.GZIP, bytes([0x1F, 0x8B])),
    (CompressionType.LZ4, bytes([0x04, 0x22, 0x4D, 0x18])),
)

_LEVEL_BOUNDS: dict[CompressionType, tuple[int, int]] = {
    CompressionType.ZSTD: (1, 19),
    CompressionType.LZ4: (lz4.frame.COMPRESSIONLEVEL_MINHC, 12),
}

_GZIP_LEVEL = 6
_SIGNATURE_WIDTH = 4


def clamp_level(compression: CompressionType, level: int | float) -> int:
    """Clamp a configured level into the codec's accepted range."""
    level = int(level)
    bounds = _LEVEL_BOUNDS.get(compression)
    if bounds is None:
        return level
    low, high = bounds
    return min(max(level, low), high)


def _compress(data: bytes, compression: CompressionType, level: int) -> bytes:
    if compression == CompressionType.ZSTD:
        return zstd.ZstdCompressor(level=clamp_level(compression, level)).compress(data)
    if compression == CompressionType.LZ4:
        return lz4.frame.compress(data, compression_level=clamp_level(compression, level))
    if compression == CompressionType.GZIP:
        buffer = BytesIO()
        with gzip.GzipFile(fileobj=buffer, mode="wb", compresslevel=_GZIP_LEVEL) as gz:
            gz.write(data)
        return buffer.getvalue()
    return data


def compress_bytes(
    data: bytes,
    compression: CompressionType | str | None,
    level: int = 3,
) -> tuple[bytes, str]:
    """Compress ``data`` and return it together with the file suffix to store it under.

    If the codec fails, the original bytes are returned with an empty suffix so the
    asset is stored uncompressed rather than lost.
    """
    compression = CompressionType.parse(compression)
    if compression == CompressionType.NONE:
        return data, ""
    try:
        compressed = _compress(data, compression, level)
    except Exception as e:
        logger.warning(f"{compression.value} compression failed, storing uncompressed: {e}")
        return data, ""

    logger.debug(f"Compressed {len(data)} bytes to {len(compressed)} bytes with {compression.value}")
    return compressed, SUFFIXES[compression]


def detect_compression(data: bytes) -> CompressionType:
    """Identify the codec that produced ``data`` from its leading bytes."""
    if len(data) < _SIGNATURE_WIDTH:
        return CompressionType.NONE
    for compression, signature in SIGNATURES:
        if data[: len(signature)] == signature:
            return compression
    return CompressionType.NONE


def decompress_bytes(data: bytes, compression: CompressionType) -> bytes:
    """Decompress binary data.

    Raises:
        DecompressionError: The payload claims a codec but cannot be decoded.
    """
    if compression == CompressionType.NONE:
        return data
    try:
        if compression == CompressionType.ZSTD:
            return zstd.ZstdDecompressor().decompress(data)
        if compression == CompressionType.LZ4:
            return lz4.frame.decompress(data)
        if compression == CompressionType.GZIP:
            return gzip.decompress(data)
    except Exception as e:
        raise DecompressionError(f"{compression.value} decompression failed: {e}") from e
    raise ValueError(f"Unsupported compression type: {compression}")


def estimate_compression_ratio(original_size: int, compressed_size: int) -> float:
    """Calculate space saved as a percentage (0-100)."""
    if original_size == 0:
        return 0.0
    return (1 - compressed_size / original_size) * 100
