"""Application service: Update Order Status use case.

Moves an order along the status graph and applies the stock side effect
of the target status: ``cancelado`` gives reserved units back to the
shelf, ``entregado`` clears the reservation of the delivered units.
"""

from __future__ import annotations

import logging

from llantera.application.dto import OrderDTO
from llantera.application.show_order import to_dto
from llantera.domain.exceptions import EntityNotFoundError
from llantera.domain.model.order import Order, OrderStatus
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        inventory_repo: InventoryRepository,
    ) -> None:
        self._order_repo = order_repo
        self._inventory_repo = inventory_repo

    def handle(self, order_id: int, new_status: str, admin_notes: str = "") -> OrderDTO:
        target = OrderStatus.parse(new_status)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.transition_to(target, admin_notes=admin_notes.strip())
        self._order_repo.save(order)

        if target is OrderStatus.CANCELADO:
            self._release(order)
        elif target is OrderStatus.ENTREGADO:
            self._confirm(order)

        logger.info(
            "Order %s moved from %s to %s",
            order.display_number, previous.value, target.value,
        )
        return to_dto(order)

    # --- Ledger side effects --------------------------------------------------

    def _release(self, order: Order) -> None:
        for item in order.items:
            if not self._inventory_repo.release_stock(item.tire_sku, item.quantity):
                logger.warning(
                    "No inventory for %s; nothing released for order %s",
                    item.tire_sku, order.display_number,
                )

    def _confirm(self, order: Order) -> None:
        for item in order.items:
            if not self._inventory_repo.confirm_sale(item.tire_sku, item.quantity):
                logger.warning(
                    "No inventory for %s; sale of order %s not confirmed",
                    item.tire_sku, order.display_number,
                )
