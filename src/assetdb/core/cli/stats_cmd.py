"""assetdb stats: storage totals broken down by codec."""

from __future__ import annotations

from collections import Counter

import click

from .common import create_store, run


@click.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Summarize stored assets and the space compression saves."""
    from assetdb.core.storage import detect_compression, estimate_compression_ratio
    from assetdb.core.storage.paths import ASSET_FILE_NAME, asset_dir, find_asset_file

    store = create_store(ctx)

    async def _collect() -> tuple[Counter, int, int]:
        codecs: Counter = Counter()
        original_total = 0
        stored_total = 0
        async for summary in store.iter_assets():
            payload = find_asset_file(asset_dir(store.base_path, summary.user_id, summary.asset_id))
            if payload is None:
                # deleted mid-walk
                continue
            if payload.name == ASSET_FILE_NAME:
                codec = "none"
            else:
                with open(payload, "rb") as f:
                    codec = detect_compression(f.read(4)).value
            codecs[codec] += 1
            original_total += summary.size
            stored_total += payload.stat().st_size
        return codecs, original_total, stored_total

    codecs, original_total, stored_total = run(_collect())

    click.echo(f"Assets:        {sum(codecs.values())}")
    for codec, count in sorted(codecs.items()):
        click.echo(f"  {codec:<12}{count}")
    click.echo(f"Original size: {original_total} bytes")
    click.echo(f"Stored size:   {stored_total} bytes")
    click.echo(f"Space saved:   {estimate_compression_ratio(original_total, stored_total):.1f}%")
