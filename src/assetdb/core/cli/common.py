"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import click

from assetdb.core.exceptions import AssetDBError

ASSETDB_DIR = Path.home() / ".assetdb"
DEFAULT_CONFIG_PATH = ASSETDB_DIR / "config.yaml"

T = TypeVar("T")


def load_config(ctx: click.Context):
    """Load config from the file given to the ``--config`` group option."""
    from assetdb.core.config import Config

    config_file = (ctx.find_root().obj or {}).get("config_file")
    return Config(config_file=config_file)


def create_store(ctx: click.Context):
    """Configure logging and build the asset store from config."""
    from assetdb.core.storage import LocalAssetStore
    from assetdb.core.utils.logging import setup_logging

    config = load_config(ctx)
    try:
        settings = config.validated()
    except AssetDBError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(level=settings.logging.level, log_file=settings.logging.file)
    return LocalAssetStore.from_config(config)


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a store coroutine, turning library errors into a clean CLI failure."""
    try:
        return asyncio.run(coro)
    except AssetDBError as e:
        raise click.ClickException(str(e)) from e
