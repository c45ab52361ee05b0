"""
Local filesystem asset store.

Each asset is a directory holding a (possibly compressed) payload and a JSON
metadata sidecar. The configured codec only affects new writes; reads detect
the codec from the payload file itself, so assets written under any earlier
configuration stay readable.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles
import aiofiles.os
from loguru import logger

from ..utils.file_io import discard, remove_tree, stage_copy, stage_write
from .base import (
    AssetMetadata,
    AssetNotFoundError,
    AssetStore,
    AssetSummary,
    StoredScreenshot,
    UnsupportedAssetTypeError,
    new_asset_id,
)
from .compression import CompressionType, compress_bytes, decompress_bytes, detect_compression
from .content_types import SUPPORTED_ASSET_TYPES, AssetType
from .metadata import read_metadata, stage_metadata
from .paths import (
    ASSET_FILE_NAME,
    asset_dir,
    asset_file_candidates,
    asset_file_path,
    find_asset_file,
    metadata_file_path,
    user_dir,
)

if TYPE_CHECKING:
    from ..config import Config

STREAM_CHUNK_SIZE = 64 * 1024
SCREENSHOT_FILE_NAME = "screenshot.png"


async def _await_all(*aws: Awaitable[Any]) -> list[Any]:
    """Run ``aws`` concurrently and wait for every one of them before raising the first failure."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


async def _iter_chunks(data: bytes, chunk_size: int) -> AsyncIterator[bytes]:
    view = memoryview(data)
    for offset in range(0, len(view), chunk_size):
        yield bytes(view[offset : offset + chunk_size])


class LocalAssetStore(AssetStore):
    """Per-user asset store rooted at ``base_path``."""

    def __init__(
        self,
        base_path: str | Path = "~/.assetdb-data/assets",
        compression: str | CompressionType | None = CompressionType.NONE,
        compression_level: int = 3,
        store_screenshots: bool = True,
    ):
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.compression = CompressionType.parse(compression)
        self.compression_level = compression_level
        self.store_screenshots = store_screenshots

    @classmethod
    def from_config(cls, config: Config) -> LocalAssetStore:
        settings = config.validated()
        return cls(
            base_path=settings.storage.assets_dir,
            compression=settings.compression.type,
            compression_level=settings.compression.level,
            store_screenshots=settings.crawler.store_screenshot,
        )

    def _asset_dir(self, user_id: str, asset_id: str) -> Path:
        return asset_dir(self.base_path, user_id, asset_id)

    @staticmethod
    def _check_content_type(metadata: AssetMetadata) -> None:
        if metadata.content_type not in SUPPORTED_ASSET_TYPES:
            raise UnsupportedAssetTypeError(f"Unsupported asset type: {metadata.content_type}")

    def _locate(self, user_id: str, asset_id: str) -> tuple[Path, Path]:
        directory = self._asset_dir(user_id, asset_id)
        path = find_asset_file(directory)
        if path is None:
            raise AssetNotFoundError(f"Asset file not found: {asset_id}")
        return directory, path

    @staticmethod
    async def _drop_stale_payloads(directory: Path, keep: Path) -> None:
        """Remove payload variants left behind by an earlier write under another codec."""
        for path in asset_file_candidates(directory):
            if path == keep:
                continue
            try:
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                continue
            logger.debug(f"Removed stale payload {path.name} in {directory}")

    @staticmethod
    async def _load_payload(path: Path) -> bytes:
        async with aiofiles.open(path, "rb") as f:
            data = await f.read()
        if path.name == ASSET_FILE_NAME:
            # Stored plain, by choice or after a codec failure; the bytes may
            # still begin with a codec signature (a pre-gzipped snapshot).
            return data
        compression = detect_compression(data)
        logger.debug(f"Reading {path} as {compression.value}")
        return decompress_bytes(data, compression)

    @staticmethod
    async def _effective_size(metadata: AssetMetadata, path: Path | None) -> int:
        if metadata.original_size is not None:
            return metadata.original_size
        # Assets ingested by copy, or written before sizes were tracked
        if path is None:
            raise AssetNotFoundError("Asset file not found")
        stat = await aiofiles.os.stat(path)
        return stat.st_size

    async def _write_asset(
        self,
        directory: Path,
        payload: Path,
        stage_payload: Callable[[], Awaitable[Path]],
        metadata: AssetMetadata,
    ) -> None:
        """Stage the payload and sidecar together, then rename both into place.

        Nothing is published until both temp files are complete, so a failed
        write leaves the previous asset (or no asset at all) behind instead of
        one file without the other.
        """
        created = not await aiofiles.os.path.isdir(directory)
        await aiofiles.os.makedirs(directory, exist_ok=True)

        results = await asyncio.gather(
            stage_payload(),
            stage_metadata(directory, metadata),
            return_exceptions=True,
        )
        staged = [r for r in results if isinstance(r, Path)]
        try:
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            staged_payload, staged_metadata = results
            # Sweep before the rename: a concurrent writer of the same asset can
            # then only remove variants that were published before its own sweep.
            await self._drop_stale_payloads(directory, keep=payload)
            await aiofiles.os.replace(staged_payload, payload)
            await aiofiles.os.replace(staged_metadata, metadata_file_path(directory))
        except BaseException:
            for path in staged:
                await discard(path)
            if created:
                await self._remove_if_empty(directory)
            raise

    @staticmethod
    async def _remove_if_empty(directory: Path) -> None:
        try:
            await aiofiles.os.rmdir(directory)
        except OSError:
            # another writer already published into it
            return
        logger.debug(f"Removed {directory} after a failed write")

    async def save(
        self,
        user_id: str,
        asset_id: str,
        data: bytes,
        metadata: AssetMetadata,
    ) -> AssetMetadata:
        self._check_content_type(metadata)
        directory = self._asset_dir(user_id, asset_id)

        metadata = metadata.model_copy(update={"original_size": len(data)})
        compressed, suffix = compress_bytes(data, self.compression, self.compression_level)

        payload = asset_file_path(directory, suffix)
        await self._write_asset(directory, payload, partial(stage_write, payload, compressed), metadata)

        logger.debug(f"Saved asset {user_id}/{asset_id} ({len(data)} -> {len(compressed)} bytes)")
        return metadata

    async def save_from_file(
        self,
        user_id: str,
        asset_id: str,
        source_path: str | Path,
        metadata: AssetMetadata,
    ) -> None:
        self._check_content_type(metadata)
        directory = self._asset_dir(user_id, asset_id)
        source = Path(source_path)

        payload = asset_file_path(directory)
        # Copy rather than rename: the source may live on another mount.
        # Media uploads are already dense, so they are stored uncompressed.
        await self._write_asset(directory, payload, partial(stage_copy, source, payload), metadata)

        await aiofiles.os.remove(source)
        logger.debug(f"Ingested {source} as asset {user_id}/{asset_id}")

    async def read(self, user_id: str, asset_id: str) -> tuple[bytes, AssetMetadata]:
        directory, path = self._locate(user_id, asset_id)
        data, metadata = await _await_all(
            self._load_payload(path),
            read_metadata(directory),
        )
        return data, metadata

    async def open_read_stream(
        self,
        user_id: str,
        asset_id: str,
        start: int | None = None,
        end: int | None = None,
    ) -> AsyncIterator[bytes]:
        _, path = self._locate(user_id, asset_id)
        data = await self._load_payload(path)
        if start is not None and end is not None:
            data = data[start:end]
        return _iter_chunks(data, STREAM_CHUNK_SIZE)

    async def read_metadata(self, user_id: str, asset_id: str) -> AssetMetadata:
        return await read_metadata(self._asset_dir(user_id, asset_id))

    async def get_size(self, user_id: str, asset_id: str) -> int:
        directory = self._asset_dir(user_id, asset_id)
        metadata = await read_metadata(directory)
        return await self._effective_size(metadata, find_asset_file(directory))

    async def exists(self, user_id: str, asset_id: str) -> bool:
        return find_asset_file(self._asset_dir(user_id, asset_id)) is not None

    async def delete(self, user_id: str, asset_id: str) -> None:
        directory = self._asset_dir(user_id, asset_id)
        if not await aiofiles.os.path.isdir(directory):
            raise AssetNotFoundError(f"Asset not found: {asset_id}")
        await remove_tree(directory)

    async def delete_user_assets(self, user_id: str) -> None:
        directory = user_dir(self.base_path, user_id)
        if not await aiofiles.os.path.isdir(directory):
            return
        await remove_tree(directory)
        logger.info(f"Deleted all assets of user {user_id}")

    async def iter_assets(self) -> AsyncIterator[AssetSummary]:
        if not self.base_path.is_dir():
            return

        # <root>/<user_id>/<asset_id>/asset.bin*; nothing deeper is looked at
        with os.scandir(self.base_path) as users:
            for user_entry in users:
                if not user_entry.is_dir():
                    continue
                with os.scandir(user_entry.path) as assets:
                    for asset_entry in assets:
                        if not asset_entry.is_dir():
                            continue
                        directory = Path(asset_entry.path)
                        payload = find_asset_file(directory)
                        if payload is None:
                            continue
                        metadata = await read_metadata(directory)
                        size = await self._effective_size(metadata, payload)
                        yield AssetSummary(
                            user_id=user_entry.name,
                            asset_id=asset_entry.name,
                            metadata=metadata,
                            size=size,
                        )

    async def store_screenshot(
        self,
        screenshot: bytes | None,
        user_id: str,
        job_id: str,
    ) -> StoredScreenshot | None:
        """Persist a crawler screenshot as a PNG asset, unless disabled or empty."""
        if not self.store_screenshots:
            logger.info(f"[Crawler][{job_id}] Skipping storing the screenshot as per the config.")
            return None
        if not screenshot:
            logger.info(f"[Crawler][{job_id}] Skipping storing the screenshot as it's empty.")
            return None

        asset_id = new_asset_id()
        content_type = AssetType.IMAGE_PNG.value
        await self.save(
            user_id,
            asset_id,
            screenshot,
            AssetMetadata(content_type=content_type, file_name=SCREENSHOT_FILE_NAME),
        )
        logger.info(f"[Crawler][{job_id}] Stored the screenshot as assetId: {asset_id}")
        return StoredScreenshot(
            asset_id=asset_id,
            content_type=content_type,
            file_name=SCREENSHOT_FILE_NAME,
            size=len(screenshot),
        )
