"""
Abstract base class for asset stores.

Provides a unified async interface over per-user asset storage, plus the
shared metadata model and the storage error hierarchy.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import AssetDBError


class AssetMetadata(BaseModel):
    """Declared metadata stored in an asset's sidecar.

    Field aliases are the on-disk JSON keys; Python code uses the snake_case names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content_type: str = Field(alias="contentType")
    file_name: str | None = Field(default=None, alias="fileName")
    original_size: int | None = Field(default=None, alias="originalSize")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


@dataclass
class AssetSummary:
    """One row of an administrative listing."""

    user_id: str
    asset_id: str
    metadata: AssetMetadata
    size: int


@dataclass
class StoredScreenshot:
    """What the crawler needs back after persisting a screenshot."""

    asset_id: str
    content_type: str
    file_name: str
    size: int


def new_asset_id() -> str:
    """Generate a fresh, random asset identifier."""
    return str(uuid.uuid4())


class AssetStore(ABC):
    """Abstract base class for asset stores."""

    @abstractmethod
    async def save(self, user_id: str, asset_id: str, data: bytes, metadata: AssetMetadata) -> AssetMetadata:
        """Persist ``data`` and its sidecar, returning the metadata as stored.

        Raises UnsupportedAssetTypeError for disallowed types.
        """

    @abstractmethod
    async def save_from_file(
        self, user_id: str, asset_id: str, source_path: str | Path, metadata: AssetMetadata
    ) -> None:
        """Ingest an already-materialized file, removing the source on success."""

    @abstractmethod
    async def read(self, user_id: str, asset_id: str) -> tuple[bytes, AssetMetadata]:
        """Return the original bytes and metadata. Raises AssetNotFoundError if missing."""

    @abstractmethod
    async def open_read_stream(
        self, user_id: str, asset_id: str, start: int | None = None, end: int | None = None
    ) -> AsyncIterator[bytes]:
        """Stream the decompressed bytes, optionally sliced to ``[start, end)``."""

    @abstractmethod
    async def read_metadata(self, user_id: str, asset_id: str) -> AssetMetadata:
        """Read only the sidecar."""

    @abstractmethod
    async def get_size(self, user_id: str, asset_id: str) -> int:
        """Uncompressed size, falling back to the on-disk payload size."""

    @abstractmethod
    async def exists(self, user_id: str, asset_id: str) -> bool:
        """Check whether a payload exists for the asset."""

    @abstractmethod
    async def delete(self, user_id: str, asset_id: str) -> None:
        """Delete an asset. Raises AssetNotFoundError if it doesn't exist."""

    async def silent_delete(self, user_id: str, asset_id: str | None) -> None:
        """Delete an asset if it exists, ignoring any error."""
        if not asset_id:
            return
        try:
            await self.delete(user_id, asset_id)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"Ignoring failure deleting asset {user_id}/{asset_id}: {e}")

    @abstractmethod
    async def delete_user_assets(self, user_id: str) -> None:
        """Remove every asset owned by ``user_id``. No-op if there are none."""

    @abstractmethod
    def iter_assets(self) -> AsyncIterator[AssetSummary]:
        """Lazily enumerate every stored asset."""


class StorageError(AssetDBError):
    """Base exception for storage errors."""


class AssetNotFoundError(StorageError, KeyError):
    """Raised when an asset payload or sidecar doesn't exist."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class AssetValidationError(StorageError, ValueError):
    """Raised before any disk mutation when input fails validation."""


class UnsupportedAssetTypeError(AssetValidationError):
    """Raised when a content type is not in the relevant allow-list."""


class InvalidMetadataError(AssetValidationError):
    """Raised when a metadata sidecar is malformed."""


class InvalidAssetIdError(AssetValidationError):
    """Raised when a user or asset identifier is not a safe path segment."""


class DecompressionError(StorageError):
    """Raised when a payload carries a codec signature but fails to decode."""
