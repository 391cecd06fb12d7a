"""Abstract repository for customer price levels."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.price_level import PriceLevel


class PriceLevelRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> PriceLevel | None:
        """Return a level by code, or None."""

    @abstractmethod
    def list(self) -> list[PriceLevel]:
        """Return every price level."""

    @abstractmethod
    def save(self, level: PriceLevel) -> None:
        """Persist a new or updated level."""
