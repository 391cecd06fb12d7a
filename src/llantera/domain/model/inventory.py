"""Inventory aggregate — stock ledger for a single tire.

``quantity`` (*cantidad*) is the stock still available to sell: it is
decremented as soon as an order reserves units.  ``reserved``
(*apartadas*) tracks how much of that already-decremented stock is
earmarked for orders in flight, so a cancellation can give it back and a
delivery can clear it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from llantera.domain.model.value_objects import Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Inventory:
    """Aggregate root for tire stock.

    Invariants:
    - ``reserved`` is never negative (release/confirm clamp at zero)
    - ``quantity`` is never negative (reserve clamps at zero)
    """

    tire_id: str
    quantity: int = 0
    reserved: int = 0
    minimum_stock: int = 0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def available_quantity(self) -> int:
        return self.quantity

    def reserve(self, quantity: Quantity) -> None:
        """Earmark stock for a new order: take it off the shelf and mark it reserved."""
        n = quantity.value
        self.quantity = max(0, self.quantity - n)
        self.reserved += n
        self.updated_at = _now()

    def release(self, quantity: Quantity) -> None:
        """Return reserved stock to the shelf (order cancelled)."""
        n = quantity.value
        self.quantity += n
        self.reserved = max(0, self.reserved - n)
        self.updated_at = _now()

    def confirm_sale(self, quantity: Quantity) -> None:
        """Clear the reservation of delivered stock.

        ``quantity`` was already decremented by ``reserve()``.
        """
        self.reserved = max(0, self.reserved - quantity.value)
        self.updated_at = _now()

    def set_on_hand(self, quantity: int, minimum_stock: int | None = None) -> None:
        """Admin stock count.  The reservation is left as it is."""
        self.quantity = quantity
        if minimum_stock is not None:
            self.minimum_stock = minimum_stock
        self.updated_at = _now()
