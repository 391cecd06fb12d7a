"""Application service: Create Order use case.

Builds the order from the cart lines (prices are the quoted snapshot),
persists it as ``solicitado`` and reserves stock for every line.
"""

from __future__ import annotations

import logging

from llantera.application.dto import OrderDTO, OrderItemSpec
from llantera.application.show_order import to_dto
from llantera.domain.model.order import Order, OrderItem
from llantera.domain.model.value_objects import Money, Quantity
from llantera.domain.repository.inventory_repository import InventoryRepository
from llantera.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        inventory_repo: InventoryRepository,
    ) -> None:
        self._order_repo = order_repo
        self._inventory_repo = inventory_repo

    def handle(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        payment_method: str,
        payment_mode: str | None = None,
        customer_notes: str = "",
    ) -> OrderDTO:
        """Create a customer order.

        Steps:
        1. Build OrderItems (quantity and unit price validated here).
        2. Let the Order aggregate validate the cart and payment method.
        3. Persist, which assigns the id and order number.
        4. Reserve stock once per line.  A SKU without an inventory row
           is logged and skipped.
        """
        items = [
            OrderItem(
                tire_sku=spec.tire_sku.strip(),
                quantity=Quantity(spec.quantity),
                unit_price=Money.of(spec.unit_price),
                tire_measure=spec.tire_measure,
                tire_brand=spec.tire_brand,
                tire_model=spec.tire_model,
            )
            for spec in item_specs
        ]

        order = Order.create(
            user_id=user_id,
            items=items,
            payment_method=payment_method,
            payment_mode=payment_mode,
            customer_notes=customer_notes,
        )
        self._order_repo.save(order)

        for item in order.items:
            if not self._inventory_repo.reserve_stock(item.tire_sku, item.quantity):
                logger.warning(
                    "No inventory for %s; order %s reserved nothing for it",
                    item.tire_sku, order.order_number,
                )

        logger.info("Created order %s for user %s", order.order_number, user_id)
        return to_dto(order)
