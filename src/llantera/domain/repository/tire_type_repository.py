"""Abstract repository for normalized tire types."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.tire import TireType


class TireTypeRepository(ABC):

    @abstractmethod
    def get_by_id(self, type_id: int) -> TireType | None:
        """Return a type by ID, or None."""

    @abstractmethod
    def get_by_name(self, name: str) -> TireType | None:
        """Return a type by name (case-insensitive), or None."""

    @abstractmethod
    def create(self, tire_type: TireType) -> None:
        """Persist a new type and assign its ID."""
