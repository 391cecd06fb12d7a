"""Unit tests for tire list filters and sort keys."""

import pytest

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.tire import TireFilter, TireSort, TireSortField


class TestTireSort:

    def test_default_is_newest_first(self):
        assert TireSort.parse("") == TireSort(TireSortField.CREATED, descending=True)

    def test_ascending_field(self):
        assert TireSort.parse("sku") == TireSort(TireSortField.SKU, descending=False)

    def test_descending_spanish_alias(self):
        assert TireSort.parse("-precio") == TireSort(TireSortField.PRICE, descending=True)

    @pytest.mark.parametrize("raw", ["modelo", "MODEL", " model "])
    def test_model_aliases(self, raw):
        assert TireSort.parse(raw).field is TireSortField.MODEL

    @pytest.mark.parametrize("raw", ["created_at", "createdAt", "creado"])
    def test_created_aliases(self, raw):
        assert TireSort.parse(raw).field is TireSortField.CREATED

    @pytest.mark.parametrize("raw", ["stock", "sku; drop table", "-"])
    def test_unknown_field_rejected(self, raw):
        with pytest.raises(ValidationError, match="Unsupported sort field"):
            TireSort.parse(raw)


class TestTireFilter:

    def test_non_positive_limit_uses_default(self):
        assert TireFilter(limit=0).normalized().limit == 50

    def test_limit_capped(self):
        assert TireFilter(limit=50_000).normalized().limit == 10_000

    def test_negative_offset_clamped(self):
        assert TireFilter(offset=-3).normalized().offset == 0

    def test_page_keeps_criteria(self):
        page = TireFilter(search="205", in_stock_only=True).page(200, 400)
        assert (page.search, page.in_stock_only, page.limit, page.offset) == ("205", True, 200, 400)
