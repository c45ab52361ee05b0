"""assetdb list/info/cat/put/delete/delete-user: per-asset administration."""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path

import click

from .common import create_store, run


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only list assets owned by this user.")
@click.pass_context
def list_assets(ctx: click.Context, user_id: str | None) -> None:
    """List stored assets as tab-separated rows."""
    store = create_store(ctx)

    async def _list() -> int:
        count = 0
        async for summary in store.iter_assets():
            if user_id and summary.user_id != user_id:
                continue
            click.echo(
                "\t".join(
                    [
                        summary.user_id,
                        summary.asset_id,
                        summary.metadata.content_type,
                        str(summary.size),
                        summary.metadata.file_name or "",
                    ]
                )
            )
            count += 1
        return count

    if run(_list()) == 0:
        click.echo("No assets found.", err=True)


@click.command()
@click.argument("user_id")
@click.argument("asset_id")
@click.pass_context
def info(ctx: click.Context, user_id: str, asset_id: str) -> None:
    """Show an asset's metadata and effective size."""
    store = create_store(ctx)

    async def _info() -> dict:
        metadata = await store.read_metadata(user_id, asset_id)
        size = await store.get_size(user_id, asset_id)
        return {**metadata.model_dump(by_alias=True), "size": size}

    click.echo(json.dumps(run(_info()), indent=2))


@click.command()
@click.argument("user_id")
@click.argument("asset_id")
@click.option("--start", type=click.IntRange(min=0), default=None, help="First byte (inclusive).")
@click.option("--end", type=click.IntRange(min=0), default=None, help="Last byte (exclusive).")
@click.pass_context
def cat(ctx: click.Context, user_id: str, asset_id: str, start: int | None, end: int | None) -> None:
    """Write an asset's original bytes to stdout."""
    if (start is None) != (end is None):
        raise click.UsageError("--start and --end must be given together.")

    store = create_store(ctx)
    out = click.get_binary_stream("stdout")

    async def _cat() -> None:
        stream = await store.open_read_stream(user_id, asset_id, start=start, end=end)
        async for chunk in stream:
            out.write(chunk)
        out.flush()

    run(_cat())


@click.command()
@click.argument("user_id")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--content-type", default=None, help="MIME type. Guessed from the file name if omitted.")
@click.option("--asset-id", default=None, help="Overwrite this asset instead of creating a new one.")
@click.pass_context
def put(
    ctx: click.Context,
    user_id: str,
    file: Path,
    content_type: str | None,
    asset_id: str | None,
) -> None:
    """Upload FILE for USER_ID and print the asset id."""
    from assetdb.core.storage import SUPPORTED_UPLOAD_ASSET_TYPES, AssetMetadata, new_asset_id

    content_type = content_type or mimetypes.guess_type(file.name)[0]
    if content_type not in SUPPORTED_UPLOAD_ASSET_TYPES:
        allowed = ", ".join(sorted(SUPPORTED_UPLOAD_ASSET_TYPES))
        raise click.BadParameter(f"{content_type!r} is not uploadable. Allowed: {allowed}", param_hint="--content-type")

    store = create_store(ctx)
    asset_id = asset_id or new_asset_id()
    metadata = AssetMetadata(content_type=content_type, file_name=file.name)

    run(store.save(user_id, asset_id, file.read_bytes(), metadata))
    click.echo(asset_id)


@click.command()
@click.argument("user_id")
@click.argument("asset_id")
@click.option("--silent", is_flag=True, help="Ignore missing assets and other errors.")
@click.pass_context
def delete(ctx: click.Context, user_id: str, asset_id: str, silent: bool) -> None:
    """Delete one asset."""
    store = create_store(ctx)
    if silent:
        run(store.silent_delete(user_id, asset_id))
        return
    run(store.delete(user_id, asset_id))
    click.echo(f"Deleted {user_id}/{asset_id}")


@click.command("delete-user")
@click.argument("user_id")
@click.confirmation_option(prompt="Delete every asset of this user?")
@click.pass_context
def delete_user(ctx: click.Context, user_id: str) -> None:
    """Delete every asset owned by USER_ID."""
    store = create_store(ctx)
    run(store.delete_user_assets(user_id))
    click.echo(f"Deleted all assets of {user_id}")
