"""Unit tests for the price column deletion guards."""

from llantera.domain.model.price_column import PriceColumn
from llantera.domain.model.price_level import PriceLevel
from llantera.domain.service.column_deletion_guards import (
    ColumnDeletion,
    first_deletion_failure,
    refuse_base_of_derived,
)


def _column(id_, code, base=None):
    if base:
        col = PriceColumn.create(code, code, mode="derived", base_code=base, amount="5")
    else:
        col = PriceColumn.create(code, code)
    col.id = id_
    return col


LISTA = _column(1, "lista")
MAYOREO = _column(2, "mayoreo", base="lista")
EMPRESA = _column(3, "empresa")
COLUMNS = [LISTA, MAYOREO, EMPRESA]


def _level(main, reference=None):
    return PriceLevel(id=1, code="empresa", name="Empresa", price_column=main,
                      reference_column=reference)


class TestGuardOrder:

    def test_list_column_is_permanent(self):
        failure = first_deletion_failure(ColumnDeletion(LISTA, COLUMNS, []))
        assert failure == "The list price column cannot be deleted"

    def test_list_guard_runs_before_base_guard(self):
        # "lista" is also the base of "mayoreo"; the list rule wins.
        failure = first_deletion_failure(ColumnDeletion(LISTA, COLUMNS, [], "empresa"))
        assert "list price" in failure

    def test_base_of_derived_refused(self):
        base = _column(4, "base")
        hijo = _column(5, "hijo", base="base")
        failure = refuse_base_of_derived(ColumnDeletion(base, [base, hijo], []))
        assert "derived column 'hijo'" in failure

    def test_base_of_derived_refused_even_with_transfer_target(self):
        base = _column(4, "base")
        hijo = _column(5, "hijo", base="base")
        request = ColumnDeletion(
            base, [LISTA, base, hijo], [_level("base", "lista")], transfer_to_code="lista",
        )
        failure = first_deletion_failure(request)
        assert "derived column 'hijo'" in failure
        assert request.transfer_target is None

    def test_unused_column_passes(self):
        assert first_deletion_failure(ColumnDeletion(EMPRESA, COLUMNS, [])) is None


class TestPriceLevelTransfer:

    def test_transfer_required_when_level_uses_column(self):
        request = ColumnDeletion(EMPRESA, COLUMNS, [_level("empresa", "lista")])
        failure = first_deletion_failure(request)
        assert "destination column" in failure

    def test_reference_column_counts_as_use(self):
        request = ColumnDeletion(EMPRESA, COLUMNS, [_level("lista", "empresa")])
        assert first_deletion_failure(request) is not None

    def test_transfer_to_itself_rejected(self):
        request = ColumnDeletion(EMPRESA, COLUMNS, [_level("empresa")], transfer_to_code="EMPRESA")
        assert "must differ" in first_deletion_failure(request)

    def test_transfer_to_unknown_rejected(self):
        request = ColumnDeletion(EMPRESA, COLUMNS, [_level("empresa")], transfer_to_code="nada")
        assert first_deletion_failure(request) == "Destination column 'nada' does not exist"

    def test_valid_transfer_records_target_and_levels(self):
        level = _level("empresa", "lista")
        request = ColumnDeletion(EMPRESA, COLUMNS, [level], transfer_to_code="mayoreo")
        assert first_deletion_failure(request) is None
        assert request.transfer_target is MAYOREO
        assert request.affected_levels == [level]

    def test_transfer_rewrites_level_columns(self):
        level = _level("empresa", "empresa")
        level.transfer_column("empresa", "mayoreo")
        assert level.columns() == ("mayoreo", "mayoreo")
