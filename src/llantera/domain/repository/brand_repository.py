"""Abstract repository for tire brands."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.tire import Brand


class BrandRepository(ABC):

    @abstractmethod
    def get_by_id(self, brand_id: int) -> Brand | None:
        """Return a brand by ID, or None."""

    @abstractmethod
    def get_by_name(self, name: str) -> Brand | None:
        """Return a brand by name (case-insensitive), or None."""

    @abstractmethod
    def get_by_alias(self, alias: str) -> Brand | None:
        """Return the brand that owns *alias* (case-insensitive), or None."""

    @abstractmethod
    def list(self) -> list[Brand]:
        """Return every brand."""

    @abstractmethod
    def create(self, brand: Brand) -> None:
        """Persist a new brand and assign its ID."""
