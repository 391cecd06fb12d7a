"""Application service: Customer Cancel Order use case.

Customers may only cancel their own orders, and only while the order is
still ``solicitado``.  Stock release is left to the status handler.
"""

from __future__ import annotations

from llantera.application.dto import OrderDTO
from llantera.application.update_order_status import UpdateOrderStatusHandler
from llantera.domain.exceptions import EntityNotFoundError, InvalidStatusError
from llantera.domain.model.order import OrderStatus
from llantera.domain.repository.order_repository import OrderRepository


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        status_handler: UpdateOrderStatusHandler,
    ) -> None:
        self._order_repo = order_repo
        self._status_handler = status_handler

    def handle(self, user_id: str, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        # Someone else's order reads as missing.
        if order is None or order.user_id != user_id:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.status is not OrderStatus.SOLICITADO:
            raise InvalidStatusError(
                f"Order {order.display_number} can no longer be cancelled "
                f"(status: {order.status.value})"
            )
        return self._status_handler.handle(order_id, OrderStatus.CANCELADO.value)
