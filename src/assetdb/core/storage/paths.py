"""
On-disk layout of the asset store.

    <root>/<user_id>/<asset_id>/asset.bin[.zst|.lz4|.gz]
    <root>/<user_id>/<asset_id>/metadata.json
"""

from __future__ import annotations

from pathlib import Path

from .base import InvalidAssetIdError
from .compression import SUFFIXES, CompressionType

ASSET_FILE_NAME = "asset.bin"
METADATA_FILE_NAME = "metadata.json"

# Probe order when locating a payload; a directory may hold a file written
# under an older codec configuration.
ASSET_SUFFIXES: tuple[str, ...] = (
    SUFFIXES[CompressionType.NONE],
    SUFFIXES[CompressionType.ZSTD],
    SUFFIXES[CompressionType.LZ4],
    SUFFIXES[CompressionType.GZIP],
)


def _check_segment(value: str, what: str) -> str:
    """Reject identifiers that would escape or collapse the two-level layout."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidAssetIdError(f"{what} cannot be empty.")
    if value in (".", ".."):
        raise InvalidAssetIdError(f"Unsafe {what} {value!r}.")
    if "/" in value or "\\" in value or "\x00" in value:
        raise InvalidAssetIdError(f"Unsafe {what} {value!r}: path separators are not allowed.")
    return value


def user_dir(root: Path, user_id: str) -> Path:
    return root / _check_segment(user_id, "user id")


def asset_dir(root: Path, user_id: str, asset_id: str) -> Path:
    return user_dir(root, user_id) / _check_segment(asset_id, "asset id")


def asset_file_path(directory: Path, suffix: str = "") -> Path:
    return directory / f"{ASSET_FILE_NAME}{suffix}"


def metadata_file_path(directory: Path) -> Path:
    return directory / METADATA_FILE_NAME


def asset_file_candidates(directory: Path) -> list[Path]:
    """Every payload variant currently present in ``directory``, in probe order."""
    return [p for p in (asset_file_path(directory, s) for s in ASSET_SUFFIXES) if p.is_file()]


def find_asset_file(directory: Path) -> Path | None:
    """Return the first existing payload file, or None if the directory holds none."""
    for suffix in ASSET_SUFFIXES:
        path = asset_file_path(directory, suffix)
        if path.is_file():
            return path
    return None
