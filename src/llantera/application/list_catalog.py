"""Application service: Public catalog (query).

Prices each tire for a customer price level.  The level is looked up in
the price level repository first and falls back to the static mapping
when it is not configured there.
"""

from __future__ import annotations

from decimal import Decimal

from llantera.application.dto import CatalogItemView
from llantera.domain.model.price_column import normalize_code
from llantera.domain.model.price_level import static_level_columns
from llantera.domain.model.tire import TireFilter
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_level_repository import PriceLevelRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.repository.tire_repository import TireRepository


class ListCatalogHandler:

    def __init__(
        self,
        tire_repo: TireRepository,
        inventory_repo: InventoryRepository,
        price_repo: PriceRepository,
        column_repo: PriceColumnRepository,
        level_repo: PriceLevelRepository | None = None,
    ) -> None:
        self._tire_repo = tire_repo
        self._inventory_repo = inventory_repo
        self._price_repo = price_repo
        self._column_repo = column_repo
        self._level_repo = level_repo

    def resolve_level(self, level: str | None) -> tuple[str, str | None]:
        """Return ``(main_code, reference_code)`` for a price level code."""
        key = normalize_code(level)
        if self._level_repo is not None and key:
            configured = self._level_repo.get_by_code(key)
            if configured is not None:
                return configured.columns()
        return static_level_columns(key)

    def handle(
        self,
        tire_filter: TireFilter | None = None,
        level: str | None = None,
    ) -> tuple[list[CatalogItemView], int]:
        tires, total = self._tire_repo.list((tire_filter or TireFilter()).normalized())
        if not tires:
            return [], total

        main_code, reference_code = self.resolve_level(level)
        code_to_id = {
            normalize_code(c.code): c.id for c in self._column_repo.list() if c.id is not None
        }
        main_id = code_to_id.get(main_code)
        reference_id = code_to_id.get(reference_code) if reference_code else None

        items: list[CatalogItemView] = []
        for tire in tires:
            main_price: Decimal | None = None
            reference_price: Decimal | None = None
            if main_id is not None or reference_id is not None:
                for row in self._price_repo.list_by_tire_id(tire.id):
                    if row.column_id == main_id:
                        main_price = row.price
                    if row.column_id == reference_id:
                        reference_price = row.price

            if main_price is None:
                main_price = tire.public_price if tire.public_price > 0 else Decimal("0")

            inventory = self._inventory_repo.get_by_tire_id(tire.id)
            items.append(
                CatalogItemView(
                    tire=tire,
                    price=main_price,
                    price_code=main_code,
                    reference_price=reference_price,
                    reference_code=reference_code if reference_price is not None else None,
                    stock=inventory.quantity if inventory is not None else None,
                )
            )
        return items, total
