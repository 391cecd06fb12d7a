"""JSON-file-backed implementation of PriceColumnRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from llantera.domain.exceptions import ConflictError, EntityNotFoundError
from llantera.domain.model.price_column import (
    PriceColumn,
    PriceMode,
    PriceOperation,
    normalize_code,
)
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.infrastructure.persistence.json_file import (
    JsonFileStore,
    dump_datetime,
    load_datetime,
)
from llantera.infrastructure.persistence.json_price_repository import JsonPriceRepository


class JsonPriceColumnRepository(JsonFileStore, PriceColumnRepository):

    def __init__(self, file_path: Path, price_repo: JsonPriceRepository) -> None:
        super().__init__(file_path)
        self._price_repo = price_repo

    # --- PriceColumnRepository interface --------------------------------------

    def get_by_id(self, column_id: int) -> PriceColumn | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == column_id:
                    return self._to_domain(raw)
        return None

    def get_by_code(self, code: str) -> PriceColumn | None:
        target = normalize_code(code)
        with self._lock:
            for raw in self._load_raw():
                if raw["code"] == target:
                    return self._to_domain(raw)
        return None

    def list(self) -> list[PriceColumn]:
        with self._lock:
            columns = [self._to_domain(raw) for raw in self._load_raw()]
        return sorted(columns, key=lambda c: (c.visual_order, c.code))

    def create(self, column: PriceColumn) -> None:
        with self._lock:
            records = self._load_raw()
            if any(r["code"] == column.code for r in records):
                raise ConflictError(f"Price column code '{column.code}' already exists")
            column.id = self._next_id(records)
            records.append(self._to_raw(column))
            self._persist_raw(records)

    def update(self, column: PriceColumn) -> None:
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == column.id:
                    records[i] = self._to_raw(column)
                    break
            else:
                raise EntityNotFoundError(f"Price column #{column.id} not found")
            self._persist_raw(records)

    def delete(self, column_id: int) -> None:
        with self._lock:
            records = self._load_raw()
            kept = [r for r in records if r["id"] != column_id]
            if len(kept) == len(records):
                raise EntityNotFoundError(f"Price column #{column_id} not found")
            self._persist_raw(kept)
        self._price_repo.delete_by_column_id(column_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(column: PriceColumn) -> dict:
        return {
            "id": column.id,
            "code": column.code,
            "name": column.name,
            "description": column.description,
            "visual_order": column.visual_order,
            "active": column.active,
            "is_public": column.is_public,
            "mode": column.mode.value,
            "base_code": column.base_code,
            "operation": column.operation.value if column.operation else None,
            "amount": str(column.amount) if column.amount is not None else None,
            "created_at": dump_datetime(column.created_at),
            "updated_at": dump_datetime(column.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PriceColumn:
        return PriceColumn(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            description=raw.get("description", ""),
            visual_order=raw.get("visual_order", 0),
            active=raw.get("active", True),
            is_public=raw.get("is_public", False),
            mode=PriceMode(raw.get("mode", "fixed")),
            base_code=raw.get("base_code"),
            operation=PriceOperation(raw["operation"]) if raw.get("operation") else None,
            amount=Decimal(raw["amount"]) if raw.get("amount") is not None else None,
            created_at=load_datetime(raw["created_at"]),
            updated_at=load_datetime(raw["updated_at"]),
        )
