import logging

import click

from llantera.infrastructure.cli.column_commands import (
    column_create,
    column_delete,
    column_list,
    column_update,
    level_list,
    level_set,
)
from llantera.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_status,
)
from llantera.infrastructure.cli.tire_commands import (
    tire_catalog,
    tire_delete,
    tire_export,
    tire_import,
    tire_import_csv,
    tire_list,
    tire_update,
    tire_upsert,
)
from llantera.infrastructure.config import load_settings


@click.group()
def cli() -> None:
    """Llantera — tire pricing and inventory"""
    logging.basicConfig(
        level=load_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def column() -> None:
    """Manage price columns."""


@cli.group()
def level() -> None:
    """Manage customer price levels."""


@cli.group()
def tire() -> None:
    """Manage tires, stock and prices."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
column.add_command(column_create)
column.add_command(column_delete)
column.add_command(column_list)
column.add_command(column_update)
level.add_command(level_list)
level.add_command(level_set)
tire.add_command(tire_catalog)
tire.add_command(tire_delete)
tire.add_command(tire_export)
tire.add_command(tire_import)
tire.add_command(tire_import_csv)
tire.add_command(tire_list)
tire.add_command(tire_update)
tire.add_command(tire_upsert)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
