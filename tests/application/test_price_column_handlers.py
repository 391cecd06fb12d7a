"""Integration tests for the price column use cases.

Uses in-memory fake repositories, no file I/O.
"""

from decimal import Decimal

import pytest

from llantera.application.create_price_column import (
    BACKFILL_PAGE_SIZE,
    CreatePriceColumnHandler,
)
from llantera.application.delete_price_column import DeletePriceColumnHandler
from llantera.application.dto import PriceColumnCommand
from llantera.application.show_price_columns import ShowPriceColumnsHandler
from llantera.application.update_price_column import UpdatePriceColumnHandler
from llantera.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from llantera.domain.model.price_column import PriceMode
from llantera.domain.model.price_level import PriceLevel
from llantera.domain.model.tire import Tire, TirePrice
from tests.fakes import FakeStore


def _setup(tire_count: int = 2) -> tuple[FakeStore, CreatePriceColumnHandler]:
    """Store with *tire_count* tires and a "lista" column priced 100, 200, ..."""
    store = FakeStore()
    for n in range(1, tire_count + 1):
        store.tires.create(Tire(id=f"t{n}", sku=f"LL-{n:03d}"))
    create = CreatePriceColumnHandler(store.columns, store.prices, store.tires)
    lista = create.handle(PriceColumnCommand(code="lista", name="Lista"))
    store.prices.upsert_many([
        TirePrice(tire_id=f"t{n}", column_id=lista.id, price=Decimal(100 * n))
        for n in range(1, tire_count + 1)
    ])
    return store, create


class TestCreatePriceColumn:

    def test_fixed_column_backfills_zero_prices(self):
        store, create = _setup()
        col = create.handle(PriceColumnCommand(code="Empresa", name="Empresa"))
        assert col.code == "empresa"
        assert col.mode is PriceMode.FIXED
        assert store.prices.price("t1", col.id) == Decimal("0")
        assert store.prices.price("t2", col.id) == Decimal("0")

    def test_backfill_pages_through_every_tire(self):
        store, create = _setup(tire_count=BACKFILL_PAGE_SIZE + 5)
        before = store.prices.upsert_calls
        col = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        assert len(store.prices.list_by_column_id(col.id)) == BACKFILL_PAGE_SIZE + 5
        assert store.prices.upsert_calls == before + 2

    def test_derived_column_filled_from_base(self):
        store, create = _setup()
        col = create.handle(PriceColumnCommand(
            code="mayoreo_6", name="Mayoreo 6", mode="derived",
            base_code="lista", operation="percent", amount="6",
        ))
        assert store.prices.price("t1", col.id) == Decimal("94")
        assert store.prices.price("t2", col.id) == Decimal("188")

    def test_duplicate_code_conflicts(self):
        _, create = _setup()
        with pytest.raises(ConflictError, match="already exists"):
            create.handle(PriceColumnCommand(code="LISTA", name="Otra lista"))

    def test_missing_base_rejected(self):
        store, create = _setup()
        with pytest.raises(ValidationError, match="does not exist"):
            create.handle(PriceColumnCommand(
                code="x", name="X", mode="derived", base_code="nada", amount="1",
            ))
        assert store.columns.get_by_code("x") is None

    def test_invalid_code_rejected(self):
        _, create = _setup()
        with pytest.raises(ValidationError, match="letters, digits and underscores"):
            create.handle(PriceColumnCommand(code="con espacio", name="X"))


class TestUpdatePriceColumn:

    def test_switch_to_derived_recomputes(self):
        store, create = _setup()
        col = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        update = UpdatePriceColumnHandler(store.columns, store.prices)

        update.handle(col.id, PriceColumnCommand(
            name="Empresa", mode="derived", base_code="lista", operation="add", amount="15",
        ))

        assert store.prices.price("t1", col.id) == Decimal("115")

    def test_code_is_immutable(self):
        store, create = _setup()
        col = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        update = UpdatePriceColumnHandler(store.columns, store.prices)
        updated = update.handle(col.id, PriceColumnCommand(code="otro", name="Empresa VIP"))
        assert updated.code == "empresa"
        assert updated.name == "Empresa VIP"

    def test_unknown_column(self):
        store, _ = _setup()
        update = UpdatePriceColumnHandler(store.columns, store.prices)
        with pytest.raises(EntityNotFoundError):
            update.handle(99, PriceColumnCommand(name="X"))

    def test_zero_id_rejected(self):
        store, _ = _setup()
        update = UpdatePriceColumnHandler(store.columns, store.prices)
        with pytest.raises(ValidationError, match="Column ID is required"):
            update.handle(0, PriceColumnCommand(name="X"))


class TestDeletePriceColumn:

    def test_delete_cascades_prices(self):
        store, create = _setup()
        col = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        DeletePriceColumnHandler(store.columns, store.levels).handle(col.id)
        assert store.columns.get_by_id(col.id) is None
        assert store.prices.list_by_column_id(col.id) == []

    def test_list_column_is_permanent(self):
        store, _ = _setup()
        lista = store.columns.get_by_code("lista")
        with pytest.raises(ValidationError, match="list price column"):
            DeletePriceColumnHandler(store.columns, store.levels).handle(lista.id)

    def test_levels_moved_to_destination(self):
        store, create = _setup()
        empresa = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        create.handle(PriceColumnCommand(code="mayoreo", name="Mayoreo"))
        store.levels.save(PriceLevel(id=None, code="empresa", name="Empresa",
                                     price_column="empresa", reference_column="lista"))

        DeletePriceColumnHandler(store.columns, store.levels).handle(
            empresa.id, transfer_to_code="mayoreo",
        )

        assert store.levels.get_by_code("empresa").columns() == ("mayoreo", "lista")
        assert store.columns.get_by_code("empresa") is None

    def test_levels_without_destination_block_delete(self):
        store, create = _setup()
        empresa = create.handle(PriceColumnCommand(code="empresa", name="Empresa"))
        store.levels.save(PriceLevel(id=None, code="empresa", name="Empresa",
                                     price_column="empresa"))
        with pytest.raises(ValidationError, match="destination column"):
            DeletePriceColumnHandler(store.columns, store.levels).handle(empresa.id)
        assert store.columns.get_by_id(empresa.id) is not None


class TestShowPriceColumns:

    def test_list_in_visual_order(self):
        store, create = _setup()
        create.handle(PriceColumnCommand(code="b_col", name="B", visual_order=0))
        create.handle(PriceColumnCommand(code="a_col", name="A", visual_order=5))
        codes = [c.code for c in ShowPriceColumnsHandler(store.columns).list()]
        assert codes == ["b_col", "lista", "a_col"]

    def test_get_by_code_is_case_insensitive(self):
        store, _ = _setup()
        assert ShowPriceColumnsHandler(store.columns).get_by_code(" LISTA ").code == "lista"

    def test_get_unknown(self):
        store, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowPriceColumnsHandler(store.columns).get(42)
