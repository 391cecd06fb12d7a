"""Unit tests for brand and tire type normalization."""

from llantera.domain.service.catalog_normalizer import (
    OTHER_BRANDS,
    OTHER_TYPES,
    CatalogNormalizer,
)


class TestBrand:

    def test_known_alias(self):
        assert CatalogNormalizer().brand("gdy") == "Goodyear"

    def test_unknown_alias_is_title_cased(self):
        assert CatalogNormalizer().brand("michelin") == "Michelin"

    def test_empty_alias_uses_fallback(self):
        assert CatalogNormalizer().brand("", fallback="BS") == "Bridgestone"

    def test_nothing_given(self):
        assert CatalogNormalizer().brand(None) == OTHER_BRANDS


class TestTireType:

    def test_first_known_candidate_wins(self):
        assert CatalogNormalizer().tire_type("XYZ", "ltr", "psr") == "Light Truck Radial (LTR)"

    def test_unknown_types(self):
        assert CatalogNormalizer().tire_type("", None, "raro") == OTHER_TYPES


class TestOverrides:

    def test_overrides_extend_and_replace_defaults(self):
        normalizer = CatalogNormalizer.with_overrides(
            brands={"mich": "Michelin", "GDY": "Goodyear Tire"},
            types={"otr": "Fuera de Carretera"},
        )
        assert normalizer.brand("MICH") == "Michelin"
        assert normalizer.brand("GDY") == "Goodyear Tire"
        assert normalizer.brand("BS") == "Bridgestone"
        assert normalizer.tire_type("OTR") == "Fuera de Carretera"

    def test_custom_tables_replace_everything(self):
        normalizer = CatalogNormalizer(brands={"X": "Equis"}, types={})
        assert normalizer.brand("GDY") == "Gdy"
        assert normalizer.tire_type("LTR") == OTHER_TYPES
