"""Abstract repository for the Tire aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.tire import Tire, TireFilter


class TireRepository(ABC):

    @abstractmethod
    def get_by_sku(self, sku: str) -> Tire | None:
        """Return a tire by SKU (case-insensitive), or None."""

    @abstractmethod
    def get_by_id(self, tire_id: str) -> Tire | None:
        """Return a tire by its internal ID, or None."""

    @abstractmethod
    def create(self, tire: Tire) -> None:
        """Persist a new tire."""

    @abstractmethod
    def update(self, tire: Tire) -> None:
        """Persist changes to an existing tire.

        Raises EntityNotFoundError if the tire does not exist.
        """

    @abstractmethod
    def list(self, tire_filter: TireFilter) -> tuple[list[Tire], int]:
        """Return one page of matching tires and the total match count."""

    @abstractmethod
    def delete(self, sku: str) -> Tire:
        """Remove a tire by SKU (case-insensitive) and return it.

        The tire's prices go with it; its inventory row is kept.
        Raises EntityNotFoundError if no tire has this SKU.
        """
