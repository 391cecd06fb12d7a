"""Application service: Admin tire list (query).

Joins each tire with its inventory row (if any), its brand name and a
``code -> price`` map.  Price rows whose column no longer exists are
dropped.
"""

from __future__ import annotations

from decimal import Decimal

from llantera.application.dto import AdminTireView
from llantera.domain.model.price_column import normalize_code
from llantera.domain.model.tire import Tire, TireFilter
from llantera.domain.repository.brand_repository import BrandRepository
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.repository.tire_repository import TireRepository


class ListAdminTiresHandler:

    def __init__(
        self,
        tire_repo: TireRepository,
        inventory_repo: InventoryRepository,
        price_repo: PriceRepository,
        column_repo: PriceColumnRepository,
        brand_repo: BrandRepository,
    ) -> None:
        self._tire_repo = tire_repo
        self._inventory_repo = inventory_repo
        self._price_repo = price_repo
        self._column_repo = column_repo
        self._brand_repo = brand_repo

    def handle(self, tire_filter: TireFilter | None = None) -> tuple[list[AdminTireView], int]:
        tires, total = self._tire_repo.list((tire_filter or TireFilter()).normalized())
        if not tires:
            return [], total
        return self.build_views(tires), total

    def build_views(self, tires: list[Tire]) -> list[AdminTireView]:
        code_by_id: dict[int, str] = {}
        for column in self._column_repo.list():
            code = normalize_code(column.code)
            if code and column.id is not None:
                code_by_id[column.id] = code
        brand_names = {b.id: b.name for b in self._brand_repo.list()}

        views: list[AdminTireView] = []
        for tire in tires:
            prices: dict[str, Decimal] = {}
            if code_by_id:
                for row in self._price_repo.list_by_tire_id(tire.id):
                    code = code_by_id.get(row.column_id)
                    if code is not None:
                        prices[code] = row.price
            views.append(
                AdminTireView(
                    tire=tire,
                    inventory=self._inventory_repo.get_by_tire_id(tire.id),
                    prices=prices,
                    brand_name=brand_names.get(tire.brand_id, ""),
                )
            )
        return views
