"""CLI commands for tires: catalog data, stock, prices and file imports."""

from __future__ import annotations

from pathlib import Path

import click

from llantera.application.dto import TireUpsertCommand
from llantera.domain.exceptions import DomainException
from llantera.domain.model.tire import TireFilter, TireSort
from llantera.domain.model.value_objects import to_decimal
from llantera.infrastructure.bootstrap import handlers


def _parse_prices(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated 'code=amount' options into a dict."""
    prices: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid price '{pair}'. Expected 'code=amount'."
            )
        code, amount = pair.split("=", 1)
        prices[code.strip()] = amount.strip()
    return prices


def _filter_options(func):
    func = click.option("--offset", default=0, type=int)(func)
    func = click.option("--limit", default=50, type=int)(func)
    func = click.option("--sort", default="", help="sku, model, price or created; '-' for descending.")(func)
    func = click.option("--in-stock", is_flag=True, default=False, help="Only tires with stock.")(func)
    func = click.option("--rim", default=None, type=float)(func)
    func = click.option("--width", default=None, type=int)(func)
    func = click.option("--search", default="", help="Text in SKU, model or description.")(func)
    return func


def _build_filter(search, width, rim, in_stock, sort, limit, offset) -> TireFilter:
    return TireFilter(
        search=search,
        width=width,
        rim=rim,
        in_stock_only=in_stock,
        sort=TireSort.parse(sort),
        limit=limit,
        offset=offset,
    )


@click.command("upsert")
@click.option("--sku", required=True, help="Tire SKU.")
@click.option("--brand", default="", help="Brand name.")
@click.option("--brand-alias", default="", help="Supplier brand abbreviation, e.g. GDY.")
@click.option("--model", default="", help="Model name.")
@click.option("--width", default=0, type=int)
@click.option("--profile", default=None, type=int)
@click.option("--rim", default=0.0, type=float)
@click.option("--construction", default="", help="R (radial) or D (diagonal).")
@click.option("--type", "type_name", default="", help="Tire type name or abbreviation.")
@click.option("--usage", default="", help="Usage abbreviation, e.g. LT.")
@click.option("--price", default="0", help="Public price.")
def tire_upsert(sku, brand, brand_alias, model, width, profile, rim, construction, type_name, usage, price) -> None:
    """Create or update a tire's catalog data."""
    try:
        tire = handlers().upsert_tire.handle(TireUpsertCommand(
            sku=sku,
            brand_name=brand,
            brand_alias=brand_alias,
            model=model,
            width=width,
            profile=profile,
            rim=rim,
            construction=construction,
            type_name=type_name,
            usage=usage,
            public_price=to_decimal(price, field="price"),
        ))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Tire {tire.sku} saved.")


@click.command("update")
@click.option("--sku", required=True, help="Tire SKU.")
@click.option("--quantity", default=None, type=int, help="On-hand quantity.")
@click.option("--minimum-stock", default=None, type=int, help="Reorder threshold, set with --quantity.")
@click.option("--price", "prices", multiple=True, help="Price as 'code=amount'; repeatable.")
def tire_update(
    sku: str, quantity: int | None, minimum_stock: int | None, prices: tuple[str, ...]
) -> None:
    """Set stock and per-column prices (derived columns follow)."""
    price_map = _parse_prices(prices)

    try:
        view = handlers().update_admin.handle(
            sku, quantity=quantity, prices=price_map, minimum_stock=minimum_stock
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    stock = view.inventory.quantity if view.inventory else 0
    click.echo(f"Tire {view.tire.sku}: stock {stock}")
    for code, value in sorted(view.prices.items()):
        click.echo(f"  {code:<14} {value:>12}")


@click.command("list")
@_filter_options
def tire_list(**options) -> None:
    """Admin list: stock and every column price."""
    try:
        views, total = handlers().admin_list.handle(_build_filter(**options))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not views:
        click.echo("No tires found.")
        return

    click.echo(f"{'SKU':<16} {'Brand':<14} {'Measure':<28} {'Stock':>6} {'Resv':>5}  Prices")
    click.echo("-" * 90)
    for v in views:
        stock = v.inventory.quantity if v.inventory else 0
        reserved = v.inventory.reserved if v.inventory else 0
        prices = " ".join(f"{code}={value}" for code, value in sorted(v.prices.items()))
        click.echo(
            f"{v.tire.sku:<16} {v.brand_name:<14} {v.tire.original_measure:<28} "
            f"{stock:>6} {reserved:>5}  {prices}"
        )
    click.echo(f"{len(views)} of {total} tires")


@click.command("catalog")
@click.option("--level", default="", help="Customer price level code.")
@_filter_options
def tire_catalog(level: str, **options) -> None:
    """Customer catalog priced for a price level."""
    try:
        items, total = handlers().catalog.handle(_build_filter(**options), level=level)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("No tires found.")
        return

    for item in items:
        was = f"  (was {item.reference_price})" if item.reference_price is not None else ""
        stock = item.stock if item.stock is not None else "-"
        click.echo(f"{item.tire.sku:<16} {item.price:>12} [{item.price_code}]{was}  stock {stock}")
    click.echo(f"{len(items)} of {total} tires")


@click.command("export")
@click.option("--output", required=True, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--search", default="", help="Only tires matching this text.")
def tire_export(output: Path, search: str) -> None:
    """Export the admin catalog to an XLSX file."""
    try:
        data = handlers().export_admin.handle(TireFilter(search=search))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    output.write_bytes(data)
    click.echo(f"Catalog written to {output}")


@click.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tire_import(source: Path) -> None:
    """Import tires, stock and prices from an XLSX file."""
    try:
        processed = handlers().import_tires.handle(source.read_bytes())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{processed} tires imported.")


@click.command("import-csv")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tire_import_csv(source: Path) -> None:
    """Import the supplier inventory list (';'-separated CSV)."""
    try:
        processed = handlers().import_csv.handle(source.read_bytes())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{processed} tires imported.")


@click.command("delete")
@click.option("--sku", required=True, help="Tire SKU.")
def tire_delete(sku: str) -> None:
    """Remove a tire and its prices (stock records are kept)."""
    try:
        removed = handlers().delete_tire.handle(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Tire {removed.sku} deleted.")
