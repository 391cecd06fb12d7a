"""JSON-file-backed implementation of TireRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from llantera.domain.exceptions import EntityNotFoundError
from llantera.domain.model.tire import Tire, TireFilter, TireSortField
from llantera.domain.repository.tire_repository import TireRepository
from llantera.infrastructure.persistence.json_file import (
    JsonFileStore,
    dump_datetime,
    load_datetime,
)
from llantera.infrastructure.persistence.json_price_repository import JsonPriceRepository


_SORT_KEYS = {
    TireSortField.SKU: lambda t: t.sku.lower(),
    TireSortField.MODEL: lambda t: t.model.lower(),
    TireSortField.PRICE: lambda t: t.public_price,
    TireSortField.CREATED: lambda t: t.created_at,
}


class JsonTireRepository(JsonFileStore, TireRepository):
    """Tires in one JSON file.

    ``inventory_path`` points at the inventory file so that
    ``in_stock_only`` filters can see stock levels.
    Deleting a tire also drops its rows from ``price_repo`` when given.
    """

    def __init__(
        self,
        file_path: Path,
        inventory_path: Path | None = None,
        price_repo: JsonPriceRepository | None = None,
    ) -> None:
        super().__init__(file_path)
        self._inventory_path = inventory_path
        self._price_repo = price_repo

    # --- TireRepository interface ---------------------------------------------

    def get_by_sku(self, sku: str) -> Tire | None:
        target = sku.strip().lower()
        with self._lock:
            for raw in self._load_raw():
                if raw["sku"].lower() == target:
                    return self._to_domain(raw)
        return None

    def get_by_id(self, tire_id: str) -> Tire | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == tire_id:
                    return self._to_domain(raw)
        return None

    def create(self, tire: Tire) -> None:
        with self._lock:
            records = self._load_raw()
            records.append(self._to_raw(tire))
            self._persist_raw(records)

    def update(self, tire: Tire) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == tire.id:
                    records[i] = self._to_raw(tire)
                    break
            else:
                raise EntityNotFoundError(f"Tire not found: '{tire.sku}'")
            self._persist_raw(records)

    def delete(self, sku: str) -> Tire:
        target = sku.strip().lower()
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["sku"].lower() == target:
                    removed = self._to_domain(records.pop(i))
                    break
            else:
                raise EntityNotFoundError(f"Tire not found: '{sku.strip()}'")
            self._persist_raw(records)
        if self._price_repo is not None:
            self._price_repo.delete_by_tire_id(removed.id)
        return removed

    def list(self, tire_filter: TireFilter) -> tuple[list[Tire], int]:
        with self._lock:
            tires = [self._to_domain(raw) for raw in self._load_raw()]
        in_stock = self._in_stock_ids() if tire_filter.in_stock_only else None

        matches = [
            t for t in tires
            if self._matches(t, tire_filter) and (in_stock is None or t.id in in_stock)
        ]

        sort = tire_filter.sort
        matches.sort(key=_SORT_KEYS[sort.field], reverse=sort.descending)

        start = tire_filter.offset
        return matches[start:start + tire_filter.limit], len(matches)

    # --- Filtering ------------------------------------------------------------

    @staticmethod
    def _matches(tire: Tire, f: TireFilter) -> bool:
        if f.search:
            needle = f.search.strip().lower()
            haystack = " ".join(
                (tire.sku, tire.model, tire.description, tire.original_measure)
            ).lower()
            if needle not in haystack:
                return False
        if f.brand_id is not None and tire.brand_id != f.brand_id:
            return False
        if f.type_id is not None and tire.type_id != f.type_id:
            return False
        if f.width is not None and tire.width != f.width:
            return False
        if f.profile is not None and tire.profile != f.profile:
            return False
        if f.rim is not None and tire.rim != f.rim:
            return False
        for wanted, actual in (
            (f.usage, tire.usage),
            (f.construction, tire.construction),
            (f.ply_rating, tire.ply_rating),
            (f.load_index, tire.load_index),
            (f.speed_index, tire.speed_index),
        ):
            if wanted and wanted.strip().lower() != actual.lower():
                return False
        return True

    def _in_stock_ids(self) -> set[str]:
        if self._inventory_path is None or not self._inventory_path.exists():
            return set()
        records = json.loads(self._inventory_path.read_text(encoding="utf-8"))
        return {r["tire_id"] for r in records if r.get("quantity", 0) > 0}

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(tire: Tire) -> dict:
        return {
            "id": tire.id,
            "sku": tire.sku,
            "model": tire.model,
            "brand_id": tire.brand_id,
            "width": tire.width,
            "profile": tire.profile,
            "rim": tire.rim,
            "construction": tire.construction,
            "tube_type": tire.tube_type,
            "ply_rating": tire.ply_rating,
            "load_index": tire.load_index,
            "speed_index": tire.speed_index,
            "type_id": tire.type_id,
            "usage": tire.usage,
            "description": tire.description,
            "public_price": str(tire.public_price),
            "image_url": tire.image_url,
            "original_measure": tire.original_measure,
            "created_at": dump_datetime(tire.created_at),
            "updated_at": dump_datetime(tire.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Tire:
        return Tire(
            id=raw["id"],
            sku=raw["sku"],
            model=raw.get("model", ""),
            brand_id=raw.get("brand_id"),
            width=raw.get("width", 0),
            profile=raw.get("profile"),
            rim=raw.get("rim", 0.0),
            construction=raw.get("construction", ""),
            tube_type=raw.get("tube_type", ""),
            ply_rating=raw.get("ply_rating", ""),
            load_index=raw.get("load_index", ""),
            speed_index=raw.get("speed_index", ""),
            type_id=raw.get("type_id"),
            usage=raw.get("usage", ""),
            description=raw.get("description", ""),
            public_price=Decimal(raw.get("public_price", "0")),
            image_url=raw.get("image_url", ""),
            original_measure=raw.get("original_measure", ""),
            created_at=load_datetime(raw["created_at"]),
            updated_at=load_datetime(raw["updated_at"]),
        )
