"""Integration tests for the order use cases and their stock side effects.

Uses in-memory fake repositories, no file I/O.
"""

import logging

import pytest

from llantera.application.cancel_order import CancelOrderHandler
from llantera.application.create_order import CreateOrderHandler
from llantera.application.dto import OrderItemSpec
from llantera.application.show_order import ShowOrderHandler
from llantera.application.update_order_status import UpdateOrderStatusHandler
from llantera.domain.exceptions import EntityNotFoundError, InvalidStatusError, ValidationError
from llantera.domain.model.inventory import Inventory
from llantera.domain.model.tire import Tire
from tests.fakes import FakeStore


def _setup(quantity: int = 10):
    """LL-001 with *quantity* units on the shelf; LL-002 without inventory."""
    store = FakeStore()
    store.tires.create(Tire(id="t1", sku="LL-001"))
    store.tires.create(Tire(id="t2", sku="LL-002"))
    store.inventory.upsert(Inventory(tire_id="t1", quantity=quantity))
    create = CreateOrderHandler(store.orders, store.inventory)
    status = UpdateOrderStatusHandler(store.orders, store.inventory)
    cancel = CancelOrderHandler(store.orders, status)
    return store, create, status, cancel


def _ledger(store: FakeStore) -> tuple[int, int]:
    inv = store.inventory.get_by_tire_id("t1")
    return inv.quantity, inv.reserved


def _walk(status: UpdateOrderStatusHandler, order_id: int, *targets: str) -> None:
    for target in targets:
        status.handle(order_id, target)


class TestCreateOrder:

    def test_reserves_stock(self):
        store, create, _, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "1250")], "transferencia")
        assert dto.status == "solicitado"
        assert dto.order_number == "PED-000001"
        assert _ledger(store) == (7, 3)

    def test_totals_include_iva(self):
        _, create, _, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 2, "1250")], "tarjeta", "credito")
        assert (dto.subtotal, dto.iva, dto.total) == ("$2,500.00", "$400.00", "$2,900.00")
        assert dto.payment_mode == "credito"

    def test_reserve_clamps_shelf_at_zero(self):
        store, create, _, _ = _setup(quantity=2)
        create.handle("u1", [OrderItemSpec("LL-001", 5, "100")], "efectivo")
        assert _ledger(store) == (0, 5)

    def test_missing_inventory_is_logged(self, caplog):
        store, create, _, _ = _setup()
        with caplog.at_level(logging.WARNING):
            dto = create.handle("u1", [OrderItemSpec("LL-002", 1, "100")], "efectivo")
        assert "No inventory for LL-002" in caplog.text
        assert store.orders.get_by_id(dto.id) is not None

    def test_empty_cart_rejected(self):
        _, create, _, _ = _setup()
        with pytest.raises(ValidationError, match="cart is empty"):
            create.handle("u1", [], "efectivo")

    def test_bad_payment_method_rejected(self):
        store, create, _, _ = _setup()
        with pytest.raises(ValidationError, match="payment method"):
            create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "cheque")
        assert _ledger(store) == (10, 0)


class TestStatusSideEffects:

    def test_cancel_releases_reservation(self):
        store, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "100")], "efectivo")
        result = status.handle(dto.id, "CANCELADO", admin_notes="sin pago")
        assert result.status == "cancelado"
        assert _ledger(store) == (10, 0)
        assert store.orders.get_by_id(dto.id).admin_notes == "sin pago"

    def test_delivery_confirms_sale(self):
        store, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "100")], "efectivo")
        _walk(status, dto.id, "preparando", "enviado", "entregado")
        assert _ledger(store) == (7, 0)
        order = store.orders.get_by_id(dto.id)
        assert order.shipped_at is not None
        assert order.delivered_at is not None

    def test_intermediate_steps_leave_ledger_alone(self):
        store, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "100")], "efectivo")
        _walk(status, dto.id, "preparando", "enviado")
        assert _ledger(store) == (7, 3)

    def test_cancel_after_shipping_still_releases(self):
        store, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "100")], "efectivo")
        _walk(status, dto.id, "preparando", "enviado", "cancelado")
        assert _ledger(store) == (10, 0)

    def test_forbidden_transition_changes_nothing(self):
        store, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 3, "100")], "efectivo")
        with pytest.raises(InvalidStatusError, match="Cannot move order PED-000001"):
            status.handle(dto.id, "entregado")
        assert store.orders.get_by_id(dto.id).status.value == "solicitado"
        assert _ledger(store) == (7, 3)

    def test_terminal_status_is_final(self):
        _, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        status.handle(dto.id, "cancelado")
        with pytest.raises(InvalidStatusError):
            status.handle(dto.id, "preparando")

    def test_unknown_status(self):
        _, create, status, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        with pytest.raises(InvalidStatusError, match="Invalid order status"):
            status.handle(dto.id, "perdido")

    def test_unknown_order(self):
        _, _, status, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            status.handle(99, "preparando")


class TestCustomerCancel:

    def test_owner_cancels_requested_order(self):
        store, create, _, cancel = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 4, "100")], "efectivo")
        assert cancel.handle("u1", dto.id).status == "cancelado"
        assert _ledger(store) == (10, 0)

    def test_other_users_order_reads_as_missing(self):
        store, create, _, cancel = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 4, "100")], "efectivo")
        with pytest.raises(EntityNotFoundError):
            cancel.handle("u2", dto.id)
        assert _ledger(store) == (6, 4)

    def test_only_requested_orders(self):
        _, create, status, cancel = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        status.handle(dto.id, "preparando")
        with pytest.raises(InvalidStatusError, match="can no longer be cancelled"):
            cancel.handle("u1", dto.id)


class TestShowOrder:

    def test_by_id_and_number(self):
        store, create, _, _ = _setup()
        dto = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        show = ShowOrderHandler(store.orders)
        assert show.handle(dto.id).order_number == "PED-000001"
        assert show.by_number(" ped-000001 ").id == dto.id

    def test_list_filters_and_orders_newest_first(self):
        store, create, status, _ = _setup()
        first = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        second = create.handle("u1", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        create.handle("u2", [OrderItemSpec("LL-001", 1, "100")], "efectivo")
        status.handle(first.id, "cancelado")
        show = ShowOrderHandler(store.orders)

        mine, total = show.list(user_id="u1")
        assert total == 2
        assert [o.id for o in mine] == [second.id, first.id]

        cancelled, _ = show.list(status="cancelado")
        assert [o.id for o in cancelled] == [first.id]

    def test_list_bad_status(self):
        store, _, _, _ = _setup()
        with pytest.raises(InvalidStatusError):
            ShowOrderHandler(store.orders).list(status="perdido")

    def test_missing_order(self):
        store, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="PED-000404"):
            ShowOrderHandler(store.orders).by_number("PED-000404")
