"""Pydantic models for config validation.

``Config.validated()`` returns an ``AssetDBConfig`` instance.  Environment
overrides arrive as strings, so the models rely on pydantic's lax coercion
(``"false"`` -> ``False``, ``"9"`` -> ``9``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class StorageConfig(BaseModel):
    """Where assets live on disk."""

    assets_dir: Path

    @field_validator("assets_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class CompressionConfig(BaseModel):
    """Codec used for new writes.

    Unknown codec names are accepted and mean "store uncompressed", matching
    the codec registry's pass-through behaviour.
    """

    type: str = "none"
    level: int = 3

    @field_validator("type", mode="before")
    @classmethod
    def _normalize(cls, v: Any) -> Any:
        if v is None:
            return "none"
        if isinstance(v, str):
            return v.strip().lower() or "none"
        return v


class CrawlerConfig(BaseModel):
    """Settings consumed by the crawler entry point."""

    store_screenshot: bool = True


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: str | None = None


class AssetDBConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so deployments can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    storage: StorageConfig = StorageConfig(assets_dir=Path("~/.assetdb-data/assets").expanduser())
    compression: CompressionConfig = CompressionConfig()
    crawler: CrawlerConfig = CrawlerConfig()
    logging: LoggingConfig = LoggingConfig()
