"""Abstract repository for the PriceColumn aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.price_column import PriceColumn


class PriceColumnRepository(ABC):

    @abstractmethod
    def get_by_id(self, column_id: int) -> PriceColumn | None:
        """Return a column by ID, or None."""

    @abstractmethod
    def get_by_code(self, code: str) -> PriceColumn | None:
        """Return a column by its (lower-case) code, or None."""

    @abstractmethod
    def list(self) -> list[PriceColumn]:
        """Return every column ordered by visual order, then code."""

    @abstractmethod
    def create(self, column: PriceColumn) -> None:
        """Persist a new column and assign its ID."""

    @abstractmethod
    def update(self, column: PriceColumn) -> None:
        """Persist changes to an existing column."""

    @abstractmethod
    def delete(self, column_id: int) -> None:
        """Remove a column and its price rows."""
