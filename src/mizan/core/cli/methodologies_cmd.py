"""mizan methodologies: list and validate methodology documents."""

from __future__ import annotations

import click

from mizan.core.exceptions import MizanError


@click.group()
def methodologies() -> None:
    """Inspect methodology documents."""


@methodologies.command("list")
def list_methodologies() -> None:
    """List registered methodologies."""
    from mizan.zakat import get_registry

    try:
        registry = get_registry()
    except MizanError as e:
        raise click.ClickException(str(e)) from e

    for mid in registry.ids():
        meta = registry.get(mid).meta
        click.echo(f"{mid:<14} {meta.ui_label or meta.name}")


@methodologies.command("validate")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def validate(paths: tuple[str, ...]) -> None:
    """Check methodology YAML files against the schema."""
    from mizan.zakat.registry import load_methodology_file

    failures = 0
    for path in paths:
        try:
            methodology = load_methodology_file(path)
        except MizanError as e:
            failures += 1
            click.echo(f"FAIL {path}: {e}", err=True)
        else:
            click.echo(f"OK   {path} ({methodology.id})")

    if failures:
        raise click.ClickException(f"{failures} of {len(paths)} documents failed validation")
