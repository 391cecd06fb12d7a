"""Application service: Show Order use case (query)."""

from __future__ import annotations

from llantera.application.dto import OrderDTO, OrderItemDTO
from llantera.domain.exceptions import EntityNotFoundError
from llantera.domain.model.order import Order, OrderStatus
from llantera.domain.repository.order_repository import OrderRepository


def to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        payment_mode=order.payment_mode.value,
        items=[
            OrderItemDTO(
                tire_sku=item.tire_sku,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        iva=str(order.iva),
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return to_dto(order)

    def by_number(self, order_number: str) -> OrderDTO:
        order = self._order_repo.get_by_order_number(order_number.strip().upper())
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return to_dto(order)

    def list(
        self,
        user_id: str | None = None,
        status: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[OrderDTO], int]:
        """Newest first.  A blank status lists every status."""
        parsed = OrderStatus.parse(status) if status else None
        limit = limit if limit > 0 else 50
        orders, total = self._order_repo.list(
            user_id=user_id or None,
            status=parsed,
            limit=limit,
            offset=max(offset, 0),
        )
        return [to_dto(o) for o in orders], total
