"""Mizan CLI: entry point for compute and methodology commands."""

import click

from mizan import __version__


@click.group()
@click.version_option(version=__version__, package_name="mizan")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (YAML or JSON). Defaults to ~/.mizan/config.yaml.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log each calculation step.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool) -> None:
    """Mizan: zakat calculations under your chosen methodology."""
    from mizan.core.cli.common import setup_from_config

    ctx.obj = setup_from_config(config_file, verbose=verbose)


# Register subcommands
from .compute_cmd import compute  # noqa: E402
from .methodologies_cmd import methodologies  # noqa: E402

main.add_command(compute)
main.add_command(methodologies)
