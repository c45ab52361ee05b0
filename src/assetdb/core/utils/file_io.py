"""
File I/O utilities: staged async writes and off-loop tree operations.

A staged write lands in a hidden temp sibling of its target; the caller
renames it into place once everything that belongs with it is ready.
"""

from __future__ import annotations

import asyncio
import shutil
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os


def _temp_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")


async def discard(path: Path) -> None:
    """Remove ``path`` if it is still there."""
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass


async def stage_write(path: Path, data: bytes | str) -> Path:
    """Write ``data`` to a temp sibling of ``path`` and return the temp path.

    The parent directory must already exist. On failure nothing is left behind.
    """
    tmp = _temp_path(path)
    mode = "w" if isinstance(data, str) else "wb"
    encoding = "utf-8" if isinstance(data, str) else None
    try:
        async with aiofiles.open(tmp, mode, encoding=encoding) as f:
            await f.write(data)
    except BaseException:
        await discard(tmp)
        raise
    return tmp


async def stage_copy(source: Path, dest: Path) -> Path:
    """Copy ``source`` to a temp sibling of ``dest`` and return the temp path."""
    tmp = _temp_path(dest)
    loop = asyncio.get_event_loop()
    try:
        await loop.run_in_executor(None, shutil.copyfile, source, tmp)
    except BaseException:
        await discard(tmp)
        raise
    return tmp


async def remove_tree(path: Path) -> None:
    """Recursively delete a directory without blocking the event loop."""
    loop = asyncio.get_event_loop()
    await loop.run_in_executor(None, shutil.rmtree, path)
