"""Metadata sidecar I/O."""

from __future__ import annotations

from pathlib import Path

import aiofiles
from pydantic import ValidationError

from ..utils.file_io import stage_write
from .base import AssetMetadata, AssetNotFoundError, InvalidMetadataError
from .paths import metadata_file_path


async def stage_metadata(directory: Path, metadata: AssetMetadata) -> Path:
    """Serialize ``metadata`` to a temp file beside the sidecar and return its path.

    Renaming the result over ``metadata_file_path(directory)`` publishes it.
    """
    return await stage_write(metadata_file_path(directory), metadata.to_json())


async def read_metadata(directory: Path) -> AssetMetadata:
    """Load and validate the sidecar in ``directory``.

    Raises:
        AssetNotFoundError: No sidecar exists.
        InvalidMetadataError: The sidecar is not valid JSON or fails the schema.
    """
    path = metadata_file_path(directory)
    try:
        async with aiofiles.open(path, "rb") as f:
            raw = await f.read()
    except FileNotFoundError as e:
        raise AssetNotFoundError(f"Asset metadata not found: {directory.name}") from e

    try:
        return AssetMetadata.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidMetadataError(f"Invalid metadata sidecar for asset {directory.name}: {e}") from e
