"""JSON-file-backed implementation of InventoryRepository.

The store's lock is the serialization point of the stock ledger: each
reserve / release / confirm runs load, mutate and persist while holding
it.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from llantera.domain.model.inventory import Inventory
from llantera.domain.model.value_objects import Quantity
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.tire_repository import TireRepository
from llantera.infrastructure.persistence.json_file import (
    JsonFileStore,
    dump_datetime,
    load_datetime,
)


class JsonInventoryRepository(JsonFileStore, InventoryRepository):

    def __init__(self, file_path: Path, tire_repo: TireRepository) -> None:
        super().__init__(file_path)
        self._tire_repo = tire_repo

    # --- InventoryRepository interface ----------------------------------------

    def upsert(self, inventory: Inventory) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["tire_id"] == inventory.tire_id:
                    inventory.id = raw["id"]
                    records[i] = self._to_raw(inventory)
                    break
            else:
                records.append(self._to_raw(inventory))
            self._persist_raw(records)

    def get_by_tire_id(self, tire_id: str) -> Inventory | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["tire_id"] == tire_id:
                    return self._to_domain(raw)
        return None

    def set_quantity(
        self, tire_id: str, quantity: int, minimum_stock: int | None = None
    ) -> Inventory:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["tire_id"] == tire_id:
                    inventory = self._to_domain(raw)
                    inventory.set_on_hand(quantity, minimum_stock)
                    records[i] = self._to_raw(inventory)
                    break
            else:
                inventory = Inventory(tire_id=tire_id)
                inventory.set_on_hand(quantity, minimum_stock)
                records.append(self._to_raw(inventory))
            self._persist_raw(records)
        return inventory

    def reserve_stock(self, sku: str, quantity: Quantity) -> bool:
        return self._apply(sku, lambda inv: inv.reserve(quantity))

    def release_stock(self, sku: str, quantity: Quantity) -> bool:
        return self._apply(sku, lambda inv: inv.release(quantity))

    def confirm_sale(self, sku: str, quantity: Quantity) -> bool:
        return self._apply(sku, lambda inv: inv.confirm_sale(quantity))

    # --- Ledger ---------------------------------------------------------------

    def _apply(self, sku: str, mutate: Callable[[Inventory], None]) -> bool:
        tire = self._tire_repo.get_by_sku(sku)
        if tire is None:
            return False
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["tire_id"] == tire.id:
                    inventory = self._to_domain(raw)
                    mutate(inventory)
                    records[i] = self._to_raw(inventory)
                    self._persist_raw(records)
                    return True
        return False

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(inventory: Inventory) -> dict:
        return {
            "id": inventory.id,
            "tire_id": inventory.tire_id,
            "quantity": inventory.quantity,
            "reserved": inventory.reserved,
            "minimum_stock": inventory.minimum_stock,
            "created_at": dump_datetime(inventory.created_at),
            "updated_at": dump_datetime(inventory.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Inventory:
        return Inventory(
            id=raw["id"],
            tire_id=raw["tire_id"],
            quantity=raw.get("quantity", 0),
            reserved=raw.get("reserved", 0),
            minimum_stock=raw.get("minimum_stock", 0),
            created_at=load_datetime(raw["created_at"]),
            updated_at=load_datetime(raw["updated_at"]),
        )
