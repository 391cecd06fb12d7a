"""CLI commands for price columns and the price levels that use them."""

from __future__ import annotations

import click

from llantera.application.dto import PriceColumnCommand
from llantera.domain.exceptions import DomainException
from llantera.domain.model.price_column import PriceColumn
from llantera.infrastructure.bootstrap import handlers


def _describe(column: PriceColumn) -> str:
    if column.is_derived:
        return f"{column.base_code} {column.operation.value} {column.amount}"  # type: ignore[union-attr]
    return "fixed"


def _column_options(func):
    func = click.option("--amount", default=None, help="Operand of the derivation.")(func)
    func = click.option(
        "--operation",
        default="",
        type=click.Choice(["", "add", "subtract", "multiply", "percent"]),
        help="Derivation operation (default percent).",
    )(func)
    func = click.option("--base", "base_code", default="", help="Base column code.")(func)
    func = click.option(
        "--mode", default="fixed", type=click.Choice(["fixed", "derived"]), help="Column mode."
    )(func)
    func = click.option("--public/--private", "is_public", default=False)(func)
    func = click.option("--active/--inactive", default=True)(func)
    func = click.option("--order", "visual_order", default=0, type=int, help="Display order.")(func)
    func = click.option("--description", default="", help="Free-text description.")(func)
    return func


@click.command("create")
@click.option("--code", required=True, help="Column code, e.g. mayoreo_6.")
@click.option("--name", required=True, help="Display name.")
@_column_options
def column_create(code: str, name: str, **options) -> None:
    """Create a price column (derived columns are filled immediately)."""
    cmd = PriceColumnCommand(code=code, name=name, **options)

    try:
        column = handlers().create_column.handle(cmd)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Price column #{column.id} '{column.code}' created ({_describe(column)})")


@click.command("update")
@click.option("--id", "column_id", required=True, type=int, help="Column ID.")
@click.option("--name", required=True, help="Display name.")
@_column_options
def column_update(column_id: int, name: str, **options) -> None:
    """Reconfigure a price column (derived columns are recomputed)."""
    cmd = PriceColumnCommand(name=name, **options)

    try:
        column = handlers().update_column.handle(column_id, cmd)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Price column #{column.id} '{column.code}' updated ({_describe(column)})")


@click.command("delete")
@click.option("--id", "column_id", required=True, type=int, help="Column ID.")
@click.option("--transfer-to", default=None, help="Column code that takes over its price levels.")
def column_delete(column_id: int, transfer_to: str | None) -> None:
    """Delete a price column and its prices."""
    try:
        handlers().delete_column.handle(column_id, transfer_to_code=transfer_to)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Price column #{column_id} deleted.")


@click.command("list")
def column_list() -> None:
    """List price columns in display order."""
    columns = handlers().show_columns.list()

    if not columns:
        click.echo("No price columns found.")
        return

    click.echo(f"{'ID':<5} {'Code':<14} {'Name':<22} {'Order':>5}  Rule")
    click.echo("-" * 64)
    for c in columns:
        flag = "" if c.active else " (inactive)"
        click.echo(f"{c.id:<5} {c.code:<14} {c.name:<22} {c.visual_order:>5}  {_describe(c)}{flag}")


@click.command("set")
@click.option("--code", required=True, help="Level code, e.g. distribuidor.")
@click.option("--name", required=True, help="Display name.")
@click.option("--column", "price_column", required=True, help="Column code the level pays.")
@click.option("--reference", default=None, help="Column code shown as the reference price.")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--discount", default=None, help="Extra discount percentage, 0 to 100.")
@click.option("--offers/--no-offers", "can_view_offers", default=None, help="Whether the level sees offers.")
def level_set(
    code: str,
    name: str,
    price_column: str,
    reference: str | None,
    description: str | None,
    discount: str | None,
    can_view_offers: bool | None,
) -> None:
    """Create or update a price level."""
    try:
        saved = handlers().save_level.handle(
            code, name, price_column, reference,
            description=description,
            discount_percentage=discount,
            can_view_offers=can_view_offers,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    ref = f", reference '{saved.reference_column}'" if saved.reference_column else ""
    click.echo(f"Price level '{saved.code}' pays '{saved.price_column}'{ref}")


@click.command("list")
def level_list() -> None:
    """List configured price levels."""
    levels = handlers().save_level.list()

    if not levels:
        click.echo("No price levels configured.")
        return

    for lv in levels:
        offers = "offers" if lv.can_view_offers else "-"
        click.echo(
            f"{lv.code:<16} {lv.price_column:<14} {lv.reference_column or '-':<14} "
            f"{lv.discount_percentage:>6}%  {offers}"
        )
