"""JSON-file-backed implementation of PriceRepository."""

from __future__ import annotations

from decimal import Decimal

from llantera.domain.model.tire import TirePrice
from llantera.domain.repository.price_repository import PriceRepository
from llantera.infrastructure.persistence.json_file import (
    JsonFileStore,
    dump_datetime,
    load_datetime,
)


class JsonPriceRepository(JsonFileStore, PriceRepository):

    # --- PriceRepository interface --------------------------------------------

    def upsert_many(self, prices: list[TirePrice]) -> None:
        if not prices:
            return
        with self._lock:
            records = self._load_raw()
            index = {(r["tire_id"], r["column_id"]): i for i, r in enumerate(records)}
            for price in prices:
                raw = self._to_raw(price)
                pos = index.get((price.tire_id, price.column_id))
                if pos is None:
                    index[(price.tire_id, price.column_id)] = len(records)
                    records.append(raw)
                else:
                    raw["created_at"] = records[pos]["created_at"]
                    records[pos] = raw
            self._persist_raw(records)

    def list_by_tire_id(self, tire_id: str) -> list[TirePrice]:
        with self._lock:
            return [self._to_domain(r) for r in self._load_raw() if r["tire_id"] == tire_id]

    def list_by_column_id(self, column_id: int) -> list[TirePrice]:
        with self._lock:
            return [self._to_domain(r) for r in self._load_raw() if r["column_id"] == column_id]

    # --- Maintenance ----------------------------------------------------------

    def delete_by_tire_id(self, tire_id: str) -> int:
        """Drop every price row of a tire; returns how many were removed."""
        with self._lock:
            records = self._load_raw()
            kept = [r for r in records if r["tire_id"] != tire_id]
            self._persist_raw(kept)
            return len(records) - len(kept)

    def delete_by_column_id(self, column_id: int) -> int:
        """Drop every price row of a column; returns how many were removed."""
        with self._lock:
            records = self._load_raw()
            kept = [r for r in records if r["column_id"] != column_id]
            self._persist_raw(kept)
            return len(records) - len(kept)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(price: TirePrice) -> dict:
        return {
            "tire_id": price.tire_id,
            "column_id": price.column_id,
            "price": str(price.price),
            "created_at": dump_datetime(price.created_at),
            "updated_at": dump_datetime(price.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> TirePrice:
        return TirePrice(
            tire_id=raw["tire_id"],
            column_id=raw["column_id"],
            price=Decimal(raw["price"]),
            created_at=load_datetime(raw["created_at"]),
            updated_at=load_datetime(raw["updated_at"]),
        )
