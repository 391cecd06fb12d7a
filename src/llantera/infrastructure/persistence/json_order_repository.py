"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from decimal import Decimal

from llantera.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentMode,
)
from llantera.domain.model.value_objects import Money, Quantity
from llantera.domain.repository.order_repository import OrderRepository
from llantera.infrastructure.persistence.json_file import (
    JsonFileStore,
    dump_datetime,
    load_datetime,
)

ORDER_NUMBER_FORMAT = "PED-{:06d}"


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["id"] == order_id:
                    return self._to_domain(raw)
        return None

    def get_by_order_number(self, order_number: str) -> Order | None:
        with self._lock:
            for raw in self._load_raw():
                if raw["order_number"] == order_number:
                    return self._to_domain(raw)
        return None

    def list(
        self,
        user_id: str | None = None,
        status: OrderStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Order], int]:
        with self._lock:
            records = self._load_raw()
        matches = [
            r for r in records
            if (user_id is None or r["user_id"] == user_id)
            and (status is None or r["status"] == status.value)
        ]
        matches.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
        page = matches[offset:offset + limit]
        return [self._to_domain(r) for r in page], len(matches)

    def save(self, order: Order) -> None:
        with self._lock:
            orders = self._load_raw()

            if order.id is None:
                order.id = self._next_id(orders)
            if not order.order_number:
                order.order_number = ORDER_NUMBER_FORMAT.format(order.id)

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    break
            else:
                orders.append(self._to_raw(order))

            self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_method": order.payment_method.value,
            "payment_mode": order.payment_mode.value,
            "shipping_cost": str(order.shipping_cost.amount),
            "customer_notes": order.customer_notes,
            "admin_notes": order.admin_notes,
            "created_at": dump_datetime(order.created_at),
            "updated_at": dump_datetime(order.updated_at),
            "shipped_at": dump_datetime(order.shipped_at),
            "delivered_at": dump_datetime(order.delivered_at),
            "cancelled_at": dump_datetime(order.cancelled_at),
            "items": [
                {
                    "tire_sku": item.tire_sku,
                    "tire_measure": item.tire_measure,
                    "tire_brand": item.tire_brand,
                    "tire_model": item.tire_model,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                tire_sku=i["tire_sku"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "MXN")),
                tire_measure=i.get("tire_measure", ""),
                tire_brand=i.get("tire_brand", ""),
                tire_model=i.get("tire_model", ""),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_mode=PaymentMode(raw.get("payment_mode", "contado")),
            status=OrderStatus(raw["status"]),
            order_number=raw.get("order_number", ""),
            shipping_cost=Money(Decimal(raw.get("shipping_cost", "0"))),
            customer_notes=raw.get("customer_notes", ""),
            admin_notes=raw.get("admin_notes", ""),
            created_at=load_datetime(raw["created_at"]),
            updated_at=load_datetime(raw["updated_at"]),
            shipped_at=load_datetime(raw.get("shipped_at")),
            delivered_at=load_datetime(raw.get("delivered_at")),
            cancelled_at=load_datetime(raw.get("cancelled_at")),
        )
