"""Application service: price column queries."""

from __future__ import annotations

from llantera.domain.exceptions import EntityNotFoundError, ValidationError
from llantera.domain.model.price_column import PriceColumn, normalize_code
from llantera.domain.repository.price_column_repository import PriceColumnRepository


class ShowPriceColumnsHandler:

    def __init__(self, column_repo: PriceColumnRepository) -> None:
        self._column_repo = column_repo

    def list(self) -> list[PriceColumn]:
        return self._column_repo.list()

    def get(self, column_id: int) -> PriceColumn:
        if column_id <= 0:
            raise ValidationError("Column ID is required")
        column = self._column_repo.get_by_id(column_id)
        if column is None:
            raise EntityNotFoundError(f"Price column #{column_id} not found")
        return column

    def get_by_code(self, code: str) -> PriceColumn:
        column = self._column_repo.get_by_code(normalize_code(code))
        if column is None:
            raise EntityNotFoundError(f"Price column '{code}' not found")
        return column
