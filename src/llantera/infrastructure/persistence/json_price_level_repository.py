"""JSON-file-backed implementation of PriceLevelRepository."""

from __future__ import annotations

from decimal import Decimal

from llantera.domain.model.price_column import normalize_code
from llantera.domain.model.price_level import PriceLevel
from llantera.domain.repository.price_level_repository import PriceLevelRepository
from llantera.infrastructure.persistence.json_file import JsonFileStore


class JsonPriceLevelRepository(JsonFileStore, PriceLevelRepository):

    def get_by_code(self, code: str) -> PriceLevel | None:
        target = normalize_code(code)
        with self._lock:
            for raw in self._load_raw():
                if normalize_code(raw["code"]) == target:
                    return self._to_domain(raw)
        return None

    def list(self) -> list[PriceLevel]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, level: PriceLevel) -> None:
        with self._lock:
            records = self._load_raw()
            if level.id is None:
                level.id = self._next_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == level.id:
                    records[i] = self._to_raw(level)
                    break
            else:
                records.append(self._to_raw(level))
            self._persist_raw(records)

    @staticmethod
    def _to_raw(level: PriceLevel) -> dict:
        return {
            "id": level.id,
            "code": level.code,
            "name": level.name,
            "price_column": level.price_column,
            "reference_column": level.reference_column,
            "description": level.description,
            "discount_percentage": str(level.discount_percentage),
            "can_view_offers": level.can_view_offers,
        }

    @staticmethod
    def _to_domain(raw: dict) -> PriceLevel:
        return PriceLevel(
            id=raw["id"],
            code=raw["code"],
            name=raw.get("name", raw["code"]),
            price_column=raw["price_column"],
            reference_column=raw.get("reference_column"),
            description=raw.get("description"),
            discount_percentage=Decimal(raw.get("discount_percentage", "0")),
            can_view_offers=raw.get("can_view_offers", False),
        )
