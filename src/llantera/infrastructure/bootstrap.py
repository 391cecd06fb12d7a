"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from llantera.application.cancel_order import CancelOrderHandler
from llantera.application.create_order import CreateOrderHandler
from llantera.application.create_price_column import CreatePriceColumnHandler
from llantera.application.delete_price_column import DeletePriceColumnHandler
from llantera.application.delete_tire import DeleteTireHandler
from llantera.application.export_admin_tires import ExportAdminTiresHandler
from llantera.application.import_inventory_csv import ImportInventoryCsvHandler
from llantera.application.import_tires import ImportTiresHandler
from llantera.application.list_admin_tires import ListAdminTiresHandler
from llantera.application.list_catalog import ListCatalogHandler
from llantera.application.save_price_level import SavePriceLevelHandler
from llantera.application.show_order import ShowOrderHandler
from llantera.application.show_price_columns import ShowPriceColumnsHandler
from llantera.application.update_order_status import UpdateOrderStatusHandler
from llantera.application.update_price_column import UpdatePriceColumnHandler
from llantera.application.update_tire_admin import UpdateTireAdminHandler
from llantera.application.upsert_tire import UpsertTireHandler
from llantera.infrastructure.config import Settings, load_settings
from llantera.infrastructure.persistence.json_brand_repository import (
    JsonBrandRepository,
    JsonTireTypeRepository,
)
from llantera.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from llantera.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from llantera.infrastructure.persistence.json_price_column_repository import (
    JsonPriceColumnRepository,
)
from llantera.infrastructure.persistence.json_price_level_repository import (
    JsonPriceLevelRepository,
)
from llantera.infrastructure.persistence.json_price_repository import (
    JsonPriceRepository,
)
from llantera.infrastructure.persistence.json_tire_repository import (
    JsonTireRepository,
)


@dataclass(frozen=True)
class Repositories:
    tires: JsonTireRepository
    inventory: JsonInventoryRepository
    prices: JsonPriceRepository
    columns: JsonPriceColumnRepository
    levels: JsonPriceLevelRepository
    brands: JsonBrandRepository
    types: JsonTireTypeRepository
    orders: JsonOrderRepository


def repositories(settings: Settings | None = None) -> Repositories:
    data_dir = (settings or load_settings()).data_dir
    prices = JsonPriceRepository(data_dir / "prices.json")
    tires = JsonTireRepository(data_dir / "tires.json", data_dir / "inventory.json", prices)
    return Repositories(
        tires=tires,
        inventory=JsonInventoryRepository(data_dir / "inventory.json", tires),
        prices=prices,
        columns=JsonPriceColumnRepository(data_dir / "price_columns.json", prices),
        levels=JsonPriceLevelRepository(data_dir / "price_levels.json"),
        brands=JsonBrandRepository(data_dir / "brands.json"),
        types=JsonTireTypeRepository(data_dir / "tire_types.json"),
        orders=JsonOrderRepository(data_dir / "orders.json"),
    )


@dataclass(frozen=True)
class Handlers:
    create_column: CreatePriceColumnHandler
    update_column: UpdatePriceColumnHandler
    delete_column: DeletePriceColumnHandler
    show_columns: ShowPriceColumnsHandler
    save_level: SavePriceLevelHandler
    upsert_tire: UpsertTireHandler
    delete_tire: DeleteTireHandler
    admin_list: ListAdminTiresHandler
    update_admin: UpdateTireAdminHandler
    catalog: ListCatalogHandler
    export_admin: ExportAdminTiresHandler
    import_tires: ImportTiresHandler
    import_csv: ImportInventoryCsvHandler
    create_order: CreateOrderHandler
    update_status: UpdateOrderStatusHandler
    cancel_order: CancelOrderHandler
    show_order: ShowOrderHandler


def handlers(settings: Settings | None = None) -> Handlers:
    settings = settings or load_settings()
    repos = repositories(settings)

    admin_list = ListAdminTiresHandler(
        repos.tires, repos.inventory, repos.prices, repos.columns, repos.brands
    )
    normalizer = settings.normalizer()
    upsert_tire = UpsertTireHandler(repos.tires, repos.brands, repos.types, normalizer)
    update_admin = UpdateTireAdminHandler(
        repos.tires, repos.inventory, repos.prices, repos.columns, admin_list
    )
    update_status = UpdateOrderStatusHandler(repos.orders, repos.inventory)

    return Handlers(
        create_column=CreatePriceColumnHandler(repos.columns, repos.prices, repos.tires),
        update_column=UpdatePriceColumnHandler(repos.columns, repos.prices),
        delete_column=DeletePriceColumnHandler(repos.columns, repos.levels),
        show_columns=ShowPriceColumnsHandler(repos.columns),
        save_level=SavePriceLevelHandler(repos.levels, repos.columns),
        upsert_tire=upsert_tire,
        delete_tire=DeleteTireHandler(repos.tires),
        admin_list=admin_list,
        update_admin=update_admin,
        catalog=ListCatalogHandler(
            repos.tires, repos.inventory, repos.prices, repos.columns, repos.levels
        ),
        export_admin=ExportAdminTiresHandler(
            admin_list, repos.columns, repos.brands, repos.types
        ),
        import_tires=ImportTiresHandler(
            repos.tires, repos.columns, repos.prices, upsert_tire, update_admin
        ),
        import_csv=ImportInventoryCsvHandler(
            repos.columns, repos.prices, upsert_tire, update_admin, normalizer
        ),
        create_order=CreateOrderHandler(repos.orders, repos.inventory),
        update_status=update_status,
        cancel_order=CancelOrderHandler(repos.orders, update_status),
        show_order=ShowOrderHandler(repos.orders),
    )
