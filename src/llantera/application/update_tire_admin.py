"""Application service: Admin update of a tire's stock and prices.

Sets the on-hand quantity, writes the given per-code prices, keeps the
tire's public price in sync with the list price and refreshes the
derived columns whose base prices were edited.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal

from llantera.application.dto import AdminTireView
from llantera.application.list_admin_tires import ListAdminTiresHandler
from llantera.domain.exceptions import EntityNotFoundError, ValidationError
from llantera.domain.model.price_column import LIST_PRICE_CODE, normalize_code
from llantera.domain.model.tire import Tire, TirePrice
from llantera.domain.model.value_objects import to_decimal
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.repository.tire_repository import TireRepository
from llantera.domain.service.price_derivation_service import PriceDerivationService

PriceInput = Mapping[str, "str | int | float | Decimal | None"]


class UpdateTireAdminHandler:

    def __init__(
        self,
        tire_repo: TireRepository,
        inventory_repo: InventoryRepository,
        price_repo: PriceRepository,
        column_repo: PriceColumnRepository,
        admin_view: ListAdminTiresHandler,
    ) -> None:
        self._tire_repo = tire_repo
        self._inventory_repo = inventory_repo
        self._price_repo = price_repo
        self._column_repo = column_repo
        self._admin_view = admin_view

    def handle(
        self,
        sku: str,
        quantity: int | None = None,
        prices: PriceInput | None = None,
        recalculate_derived: bool = True,
        minimum_stock: int | None = None,
    ) -> AdminTireView:
        """Apply the admin edits and return the refreshed admin view.

        The stock count keeps the tire's current reservation, and
        ``minimum_stock`` is only written together with a quantity.
        Price codes that match no column and ``None`` values are ignored.
        ``recalculate_derived=False`` lets bulk imports defer the derived
        refresh to a single pass at the end.
        """
        sku = sku.strip()
        if not sku:
            raise ValidationError("SKU is required")

        tire = self._tire_repo.get_by_sku(sku)
        if tire is None:
            raise EntityNotFoundError(f"Tire not found: '{sku}'")

        if quantity is not None:
            self._set_quantity(tire, quantity, minimum_stock)

        if prices:
            changed_codes = self._write_prices(tire, prices)
            if recalculate_derived and changed_codes:
                svc = PriceDerivationService(self._column_repo, self._price_repo)
                svc.recalculate_dependents(changed_codes)

        return self._admin_view.build_views([tire])[0]

    # --- Internal helpers -----------------------------------------------------

    def _set_quantity(self, tire: Tire, quantity: int, minimum_stock: int | None) -> None:
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative")
        if minimum_stock is not None and minimum_stock < 0:
            raise ValidationError("Minimum stock cannot be negative")
        self._inventory_repo.set_quantity(tire.id, quantity, minimum_stock)

    def _write_prices(self, tire: Tire, prices: PriceInput) -> set[str]:
        code_to_id = {
            normalize_code(c.code): c.id for c in self._column_repo.list() if c.id is not None
        }
        now = datetime.now(timezone.utc)
        rows: list[TirePrice] = []
        changed: set[str] = set()
        list_price: Decimal | None = None

        for raw_code, raw_value in prices.items():
            code = normalize_code(raw_code)
            if raw_value is None or code not in code_to_id:
                continue
            value = to_decimal(raw_value, field=f"price for '{code}'")
            rows.append(TirePrice(
                tire_id=tire.id,
                column_id=code_to_id[code],
                price=value,
                created_at=now,
                updated_at=now,
            ))
            changed.add(code)
            if code == LIST_PRICE_CODE:
                list_price = value

        if rows:
            self._price_repo.upsert_many(rows)

        if list_price is not None:
            tire.public_price = list_price
            tire.updated_at = now
            self._tire_repo.update(tire)

        return changed
