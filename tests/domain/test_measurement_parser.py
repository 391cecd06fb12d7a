"""Unit tests for the supplier size-string parser."""

import pytest

from llantera.domain.service.measurement_parser import (
    default_construction,
    first_number,
    parse_float,
    parse_int,
    parse_measurement,
)


class TestSizeShapes:

    def test_metric_radial(self):
        m = parse_measurement("205/55R16 91V Ecopia EP150")
        assert (m.width, m.profile, m.rim, m.construction) == (205, 55, 16.0, "R")
        assert (m.load_index, m.speed_index) == ("91", "V")
        assert m.remainder == "91V ECOPIA EP150"

    def test_metric_with_spaces(self):
        m = parse_measurement(" 265 / 70 R 16 112T ")
        assert (m.width, m.profile, m.rim) == (265, 70, 16.0)
        assert (m.load_index, m.speed_index) == ("112", "T")

    def test_metric_dash_leaves_construction_open(self):
        m = parse_measurement("110/90-17 TT")
        assert (m.width, m.profile, m.rim, m.construction) == (110, 90, 17.0, "")
        assert m.tube_type == "TT"

    def test_flotation_profile_in_mm(self):
        m = parse_measurement("31x10.50R15 LT 6PR")
        assert (m.width, m.profile, m.rim, m.construction) == (31, 267, 15.0, "R")
        assert m.ply_rating == "6PR"
        assert (m.load_index, m.speed_index) == ("", "")

    def test_moto_is_diagonal(self):
        m = parse_measurement("90/90-18 51P TL")
        assert (m.width, m.profile, m.rim, m.construction) == (90, 90, 18.0, "D")
        assert (m.load_index, m.speed_index, m.tube_type) == ("51", "P", "TL")

    def test_agricultural_width_in_mm(self):
        m = parse_measurement("7.5-16 8PR TT")
        assert (m.width, m.profile, m.rim) == (191, None, 16.0)
        assert (m.ply_rating, m.tube_type) == ("8PR", "TT")
        assert m.load_index == ""

    def test_unrecognised_size_keeps_text(self):
        m = parse_measurement("LT235/75R15 104S")
        assert (m.width, m.profile, m.rim) == (0, None, 0.0)
        assert m.remainder == "LT235/75R15 104S"
        assert (m.load_index, m.speed_index) == ("104", "S")


class TestHelpers:

    @pytest.mark.parametrize("construction, raw, expected", [
        ("R", "7.50-16", "R"),
        ("", "LT235/75R15", "R"),
        ("", "7.50-16", "D"),
        ("", "750 16", ""),
    ])
    def test_default_construction(self, construction, raw, expected):
        assert default_construction(construction, raw) == expected

    def test_first_number(self):
        assert first_number("7.50-16") == 7
        assert first_number("sin medida") == 0

    def test_numbers_from_cells(self):
        assert parse_int(" 12 ") == 12
        assert parse_int("doce") == 0
        assert parse_float("16,5") == 16.5
        assert parse_float("") == 0.0
