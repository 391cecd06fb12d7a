"""Abstract repository for the Inventory aggregate (the stock ledger)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from llantera.domain.model.inventory import Inventory
from llantera.domain.model.value_objects import Quantity


class InventoryRepository(ABC):
    """Stock ledger port.

    The three ledger operations resolve the SKU case-insensitively and
    run as one read-modify-write each; implementations must serialize
    them per tire.  They return False, without raising, when the SKU or
    its inventory row does not exist.
    """

    @abstractmethod
    def upsert(self, inventory: Inventory) -> None:
        """Insert or replace the inventory row of ``inventory.tire_id``."""

    @abstractmethod
    def get_by_tire_id(self, tire_id: str) -> Inventory | None:
        """Return the inventory record for a tire, or None."""

    @abstractmethod
    def set_quantity(
        self, tire_id: str, quantity: int, minimum_stock: int | None = None
    ) -> Inventory:
        """Set the on-hand count of a tire, creating its row if needed.

        Runs as one read-modify-write like the ledger operations, so the
        stored ``reserved`` count is kept.
        """

    @abstractmethod
    def reserve_stock(self, sku: str, quantity: Quantity) -> bool:
        """Apply ``Inventory.reserve`` to the tire with this SKU."""

    @abstractmethod
    def release_stock(self, sku: str, quantity: Quantity) -> bool:
        """Apply ``Inventory.release`` to the tire with this SKU."""

    @abstractmethod
    def confirm_sale(self, sku: str, quantity: Quantity) -> bool:
        """Apply ``Inventory.confirm_sale`` to the tire with this SKU."""
