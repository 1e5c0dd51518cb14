"""mizan compute: calculate zakat for a snapshot file."""

from __future__ import annotations

import json

import click

from mizan.core.exceptions import MizanError


@click.command()
@click.argument("snapshot_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-m",
    "--methodology",
    default=None,
    help="Methodology id. Defaults to the snapshot's own choice, then methodologies.default in config.",
)
@click.option("--silver-price", type=float, default=None, help="Silver spot price, USD per troy ounce.")
@click.option("--gold-price", type=float, default=None, help="Gold spot price, USD per troy ounce.")
@click.option("--compare", is_flag=True, help="Compute under every registered methodology.")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
@click.pass_obj
def compute(
    config,
    snapshot_file: str,
    methodology: str | None,
    silver_price: float | None,
    gold_price: float | None,
    compare: bool,
    as_json: bool,
) -> None:
    """Calculate zakat for SNAPSHOT_FILE (YAML or JSON)."""
    from mizan.core.cli.common import format_money, load_snapshot_data
    from mizan.zakat import FinancialSnapshot, compare_methodologies
    from mizan.zakat import compute as compute_zakat

    settings = config.validated()
    silver = silver_price if silver_price is not None else settings.prices.silver_per_ounce
    gold = gold_price if gold_price is not None else settings.prices.gold_per_ounce

    try:
        snapshot = FinancialSnapshot.from_mapping(load_snapshot_data(snapshot_file))
        if compare:
            results = compare_methodologies(snapshot, silver, gold)
        else:
            methodology_id = methodology or snapshot.methodology or settings.methodologies.default
            results = {methodology_id: compute_zakat(snapshot, methodology_id, silver, gold)}
    except MizanError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps({mid: r.to_dict() for mid, r in results.items()}, indent=2))
        return

    if compare:
        click.echo(f"{'Methodology':<14} {'Net wealth':>16} {'Nisab':>12} {'Zakat due':>14}")
        for mid, result in results.items():
            click.echo(
                f"{mid:<14} {format_money(result.net_zakatable_wealth):>16} "
                f"{format_money(result.nisab_threshold):>12} {format_money(result.zakat_due):>14}"
            )
        return

    (result,) = results.values()
    click.echo(f"Methodology:        {result.methodology_name}")
    click.echo(f"Zakatable assets:   {format_money(result.total_zakatable_assets)}")
    click.echo(f"Liabilities:        {format_money(result.total_liabilities)}")
    click.echo(f"Net zakatable:      {format_money(result.net_zakatable_wealth)}")
    click.echo(f"Nisab ({result.nisab_standard.value}):    {format_money(result.nisab_threshold)}")
    if not result.is_above_nisab:
        click.echo("Below nisab: no zakat due.")
    click.echo(f"Zakat due:          {format_money(result.zakat_due)}")
    if result.total_to_purify:
        click.echo(f"To purify:          {format_money(result.total_to_purify)}")
