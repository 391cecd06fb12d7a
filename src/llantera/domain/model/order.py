"""Order aggregate — customer purchase of tires.

The status graph lives here; the inventory side effects of each
transition are coordinated by the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from llantera.domain.exceptions import InvalidStatusError, ValidationError
from llantera.domain.model.value_objects import IVA_RATE, Money, Quantity


class OrderStatus(Enum):
    SOLICITADO = "solicitado"
    PREPARANDO = "preparando"
    ENVIADO = "enviado"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"

    @staticmethod
    def parse(raw: str | OrderStatus) -> OrderStatus:
        if isinstance(raw, OrderStatus):
            return raw
        try:
            return OrderStatus((raw or "").strip().lower())
        except ValueError:
            raise InvalidStatusError(f"Invalid order status: {raw!r}") from None

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.SOLICITADO: frozenset({OrderStatus.PREPARANDO, OrderStatus.CANCELADO}),
    OrderStatus.PREPARANDO: frozenset({OrderStatus.ENVIADO, OrderStatus.CANCELADO}),
    OrderStatus.ENVIADO: frozenset({OrderStatus.ENTREGADO, OrderStatus.CANCELADO}),
    OrderStatus.ENTREGADO: frozenset(),
    OrderStatus.CANCELADO: frozenset(),
}


class PaymentMethod(Enum):
    TRANSFERENCIA = "transferencia"
    TARJETA = "tarjeta"
    EFECTIVO = "efectivo"

    @staticmethod
    def parse(raw: str | PaymentMethod) -> PaymentMethod:
        if isinstance(raw, PaymentMethod):
            return raw
        try:
            return PaymentMethod((raw or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid payment method: {raw!r}") from None


class PaymentMode(Enum):
    CONTADO = "contado"
    CREDITO = "credito"
    PARCIALIDADES = "parcialidades"
    ANTICIPO = "anticipo"

    @staticmethod
    def parse(raw: str | PaymentMode | None) -> PaymentMode:
        """Unknown or missing modes fall back to a single cash payment."""
        if isinstance(raw, PaymentMode):
            return raw
        try:
            return PaymentMode((raw or "").strip().lower())
        except ValueError:
            return PaymentMode.CONTADO


@dataclass
class OrderItem:
    """A tire line of an order; the unit price is a snapshot."""

    tire_sku: str
    quantity: Quantity
    unit_price: Money
    tire_measure: str = ""
    tire_brand: str = ""
    tire_model: str = ""

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  The ``__init__`` stays simple
    so the repository can reconstitute persisted orders as they are.
    """

    id: int | None
    user_id: str
    items: list[OrderItem]
    payment_method: PaymentMethod
    payment_mode: PaymentMode = PaymentMode.CONTADO
    status: OrderStatus = OrderStatus.SOLICITADO
    order_number: str = ""
    shipping_cost: Money = field(default_factory=Money.zero)
    customer_notes: str = ""
    admin_notes: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderItem],
        payment_method: str | PaymentMethod,
        payment_mode: str | PaymentMode | None = None,
        customer_notes: str = "",
    ) -> Order:
        if not items:
            raise ValidationError("The cart is empty")
        for item in items:
            if not item.tire_sku.strip():
                raise ValidationError("Every item needs a tire SKU")
        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            payment_method=PaymentMethod.parse(payment_method),
            payment_mode=PaymentMode.parse(payment_mode),
            customer_notes=customer_notes.strip(),
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus, admin_notes: str = "") -> None:
        """Move to *target* if the status graph allows it.

        Stamps ``shipped_at`` / ``delivered_at`` / ``cancelled_at`` for the
        matching target.  Staying in the same status is not a transition.
        """
        if not self.status.can_transition_to(target):
            raise InvalidStatusError(
                f"Cannot move order {self.display_number} from "
                f"{self.status.value} to {target.value}"
            )
        now = _now()
        self.status = target
        if admin_notes:
            self.admin_notes = admin_notes
        self.updated_at = now
        if target is OrderStatus.ENVIADO:
            self.shipped_at = now
        elif target is OrderStatus.ENTREGADO:
            self.delivered_at = now
        elif target is OrderStatus.CANCELADO:
            self.cancelled_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    @property
    def iva(self) -> Money:
        return Money((self.subtotal.amount * IVA_RATE).quantize(Decimal("0.01")))

    @property
    def total(self) -> Money:
        return self.subtotal + self.iva + self.shipping_cost

    @property
    def display_number(self) -> str:
        return self.order_number or f"#{self.id}"
