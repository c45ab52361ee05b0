"""assetdb CLI: administrative access to the asset store."""

import click

from assetdb import __version__

from .common import DEFAULT_CONFIG_PATH


@click.group()
@click.version_option(version=__version__, package_name="assetdb")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="YAML or JSON config file. Ignored if it doesn't exist.",
)
@click.pass_context
def main(ctx: click.Context, config_file: str) -> None:
    """assetdb: per-user compressed asset storage."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file


# Register subcommands
from .assets_cmd import cat, delete, delete_user, info, list_assets, put
from .stats_cmd import stats

main.add_command(list_assets)
main.add_command(info)
main.add_command(cat)
main.add_command(put)
main.add_command(delete)
main.add_command(delete_user)
main.add_command(stats)
