"""Unit tests for the Inventory aggregate (stock ledger arithmetic)."""

import pytest

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.inventory import Inventory
from llantera.domain.model.value_objects import Quantity


class TestReserve:

    def test_reserve_moves_stock_to_reserved(self):
        inv = Inventory(tire_id="t1", quantity=10)
        inv.reserve(Quantity(3))
        assert inv.quantity == 7
        assert inv.reserved == 3
        assert inv.available_quantity == 7

    def test_reserve_more_than_on_hand_clamps_quantity(self):
        inv = Inventory(tire_id="t1", quantity=2)
        inv.reserve(Quantity(5))
        assert inv.quantity == 0
        assert inv.reserved == 5

    def test_reserve_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Inventory(tire_id="t1", quantity=10).reserve(Quantity(0))


class TestRelease:

    def test_release_returns_stock(self):
        inv = Inventory(tire_id="t1", quantity=7, reserved=3)
        inv.release(Quantity(3))
        assert inv.quantity == 10
        assert inv.reserved == 0

    def test_release_more_than_reserved_clamps_reserved(self):
        inv = Inventory(tire_id="t1", quantity=7, reserved=1)
        inv.release(Quantity(3))
        assert inv.quantity == 10
        assert inv.reserved == 0


class TestConfirmSale:

    def test_confirm_clears_reservation_only(self):
        inv = Inventory(tire_id="t1", quantity=7, reserved=3)
        inv.confirm_sale(Quantity(3))
        assert inv.quantity == 7
        assert inv.reserved == 0

    def test_confirm_more_than_reserved_clamps(self):
        inv = Inventory(tire_id="t1", quantity=7, reserved=2)
        inv.confirm_sale(Quantity(5))
        assert inv.reserved == 0


class TestLedgerScenarios:

    def test_reserve_then_cancel_restores_stock(self):
        inv = Inventory(tire_id="t1", quantity=10)
        inv.reserve(Quantity(3))
        inv.release(Quantity(3))
        assert (inv.quantity, inv.reserved) == (10, 0)

    def test_reserve_then_deliver_keeps_stock_down(self):
        inv = Inventory(tire_id="t1", quantity=10)
        inv.reserve(Quantity(3))
        inv.confirm_sale(Quantity(3))
        assert (inv.quantity, inv.reserved) == (7, 0)

    def test_reserved_never_negative(self):
        inv = Inventory(tire_id="t1")
        inv.release(Quantity(4))
        inv.confirm_sale(Quantity(4))
        assert inv.reserved == 0
        assert inv.quantity == 4
