"""Unit tests for the PriceDerivationService domain service."""

from decimal import Decimal

import pytest

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.price_column import PriceColumn
from llantera.domain.model.tire import TirePrice
from llantera.domain.service.price_derivation_service import PriceDerivationService
from tests.fakes import FakePriceColumnRepository, FakePriceRepository


def _setup():
    prices = FakePriceRepository()
    columns = FakePriceColumnRepository(prices)
    lista = PriceColumn.create("lista", "Lista")
    columns.create(lista)
    prices.upsert_many([
        TirePrice(tire_id="t1", column_id=lista.id, price=Decimal("100")),
        TirePrice(tire_id="t2", column_id=lista.id, price=Decimal("250.50")),
    ])
    return PriceDerivationService(columns, prices), columns, prices, lista


def _derived(columns, code, base, operation, amount, active=True):
    col = PriceColumn.create(
        code, code.title(), mode="derived", base_code=base,
        operation=operation, amount=amount, active=active,
    )
    columns.create(col)
    return col


class TestRecalculate:

    def test_percent_column_from_list_price(self):
        svc, columns, prices, _ = _setup()
        col = _derived(columns, "mayoreo_6", "lista", "percent", "6")
        assert svc.recalculate(col) == 2
        assert prices.price("t1", col.id) == Decimal("94")
        assert prices.price("t2", col.id) == Decimal("235.4700")

    def test_single_bulk_write(self):
        svc, columns, prices, _ = _setup()
        col = _derived(columns, "recargo", "lista", "add", "15")
        before = prices.upsert_calls
        svc.recalculate(col)
        assert prices.upsert_calls == before + 1
        assert prices.price("t1", col.id) == Decimal("115")

    def test_empty_base_is_noop(self):
        svc, columns, prices, _ = _setup()
        empresa = PriceColumn.create("empresa", "Empresa")
        columns.create(empresa)
        col = _derived(columns, "empresa_10", "empresa", "percent", "10")
        assert svc.recalculate(col) == 0
        assert prices.list_by_column_id(col.id) == []

    def test_fixed_column_rejected(self):
        svc, _, _, lista = _setup()
        with pytest.raises(ValidationError, match="not a derived column"):
            svc.recalculate(lista)

    def test_missing_base_rejected(self):
        svc, columns, _, _ = _setup()
        col = _derived(columns, "huerfana", "lista", "add", "1")
        col.base_code = "borrada"
        with pytest.raises(ValidationError, match="does not exist"):
            svc.recalculate(col)

    def test_unsaved_column_rejected(self):
        svc, _, _, _ = _setup()
        col = PriceColumn.create("x", "X", mode="derived", base_code="lista", amount=1)
        with pytest.raises(ValidationError, match="not been saved"):
            svc.recalculate(col)


class TestRecalculateDependents:

    def test_only_direct_active_dependents(self):
        svc, columns, prices, lista = _setup()
        mayoreo = _derived(columns, "mayoreo", "lista", "percent", "10")
        mayoreo_6 = _derived(columns, "mayoreo_6", "mayoreo", "percent", "6")
        inactive = _derived(columns, "promo", "lista", "percent", "50", active=False)

        refreshed = svc.recalculate_dependents({"LISTA"})

        assert refreshed == ["mayoreo"]
        assert prices.price("t1", mayoreo.id) == Decimal("90")
        assert prices.price("t1", mayoreo_6.id) is None
        assert prices.price("t1", inactive.id) is None


class TestRecalculateAll:

    def test_chain_settles_in_one_pass(self):
        svc, columns, prices, _ = _setup()
        # Created out of dependency order on purpose.
        mayoreo = PriceColumn.create("mayoreo", "Mayoreo")
        columns.create(mayoreo)
        mayoreo_6 = _derived(columns, "a_mayoreo_6", "mayoreo", "percent", "6")
        mayoreo.reconfigure(name="Mayoreo", mode="derived", base_code="lista", amount="10")

        refreshed = svc.recalculate_all()

        assert refreshed.index("mayoreo") < refreshed.index("a_mayoreo_6")
        assert prices.price("t1", mayoreo_6.id) == Decimal("84.6")

    def test_no_derived_columns(self):
        svc, _, _, _ = _setup()
        assert svc.recalculate_all() == []
