"""JSON-file-backed implementations of BrandRepository and TireTypeRepository."""

from __future__ import annotations

from llantera.domain.model.tire import Brand, TireType
from llantera.domain.repository.brand_repository import BrandRepository
from llantera.domain.repository.tire_type_repository import TireTypeRepository
from llantera.infrastructure.persistence.json_file import JsonFileStore


class JsonBrandRepository(JsonFileStore, BrandRepository):

    def get_by_id(self, brand_id: int) -> Brand | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == brand_id:
                    return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Brand | None:
        target = name.strip().lower()
        with self._lock:
            for raw in self._load_raw():
                if raw["name"].lower() == target:
                    return self._to_domain(raw)
        return None

    def get_by_alias(self, alias: str) -> Brand | None:
        target = alias.strip().upper()
        with self._lock:
            for raw in self._load_raw():
                if target in (a.upper() for a in raw.get("aliases", [])):
                    return self._to_domain(raw)
        return None

    def list(self) -> list[Brand]:
        with self._lock:
            return [self._to_domain(raw) for raw in self._load_raw()]

    def create(self, brand: Brand) -> None:
        with self._lock:
            records = self._load_raw()
            brand.id = self._next_id(records)
            records.append({"id": brand.id, "name": brand.name, "aliases": list(brand.aliases)})
            self._persist_raw(records)

    @staticmethod
    def _to_domain(raw: dict) -> Brand:
        return Brand(id=raw["id"], name=raw["name"], aliases=list(raw.get("aliases", [])))


class JsonTireTypeRepository(JsonFileStore, TireTypeRepository):

    def get_by_id(self, type_id: int) -> TireType | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == type_id:
                    return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> TireType | None:
        target = name.strip().lower()
        with self._lock:
            for raw in self._load_raw():
                if raw["name"].lower() == target:
                    return self._to_domain(raw)
        return None

    def create(self, tire_type: TireType) -> None:
        with self._lock:
            records = self._load_raw()
            tire_type.id = self._next_id(records)
            records.append({
                "id": tire_type.id,
                "name": tire_type.name,
                "description": tire_type.description,
            })
            self._persist_raw(records)

    @staticmethod
    def _to_domain(raw: dict) -> TireType:
        return TireType(id=raw["id"], name=raw["name"], description=raw.get("description", ""))
