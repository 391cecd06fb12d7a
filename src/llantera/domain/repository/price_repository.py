"""Abstract repository for per-tire prices (the price store)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.tire import TirePrice


class PriceRepository(ABC):

    @abstractmethod
    def upsert_many(self, prices: list[TirePrice]) -> None:
        """Insert or update rows keyed on (tire_id, column_id).

        An existing row keeps its ``created_at``.
        """

    @abstractmethod
    def list_by_tire_id(self, tire_id: str) -> list[TirePrice]:
        """Return every price row of one tire."""

    @abstractmethod
    def list_by_column_id(self, column_id: int) -> list[TirePrice]:
        """Return every price row of one column."""
