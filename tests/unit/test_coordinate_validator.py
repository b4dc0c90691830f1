"""
Unit-тесты для проверки координат
"""
import math
import pytest
from src.services.coordinate_validator import (
    Bounds, parse_coordinate, is_valid_coordinate_pair, within_bounds, filter_valid_records
)


@pytest.mark.unit
class TestParseCoordinate:
    """Разбор значений координат"""

    @pytest.mark.parametrize("value, expected", [
        ("37.7749", 37.7749),
        (" -122.4194 ", -122.4194),
        (37.5, 37.5),
        (-122, -122.0),
    ])
    def test_numeric_values(self, value, expected):
        assert parse_coordinate(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", True, False, [], {}, "nan", "inf", math.nan])
    def test_non_numeric_values(self, value):
        assert parse_coordinate(value) is None


@pytest.mark.unit
class TestCoordinatePair:
    """Проверка пары широта/долгота"""

    def test_valid_pair(self):
        assert is_valid_coordinate_pair(37.7749, -122.4194) is True

    def test_range_edges_are_valid(self):
        assert is_valid_coordinate_pair(90, 180) is True
        assert is_valid_coordinate_pair(-90, -180) is True

    @pytest.mark.parametrize("lat, lng", [
        (None, -122.4),
        (37.7, None),
        (90.01, -122.4),
        (-90.01, -122.4),
        (37.7, 180.01),
        (37.7, -180.01),
    ])
    def test_invalid_pair(self, lat, lng):
        assert is_valid_coordinate_pair(lat, lng) is False

    def test_zero_point_is_treated_as_missing(self):
        """(0, 0) - заглушка вместо координат, хотя это реальная точка"""
        assert is_valid_coordinate_pair(0, 0) is False
        assert is_valid_coordinate_pair(0.0, -122.4) is False
        assert is_valid_coordinate_pair(37.7, 0.0) is False


@pytest.mark.unit
class TestFilterValidRecords:
    """Фильтрация нормализованных записей"""

    def test_drops_invalid_records(self):
        records = [
            {"id": "a", "latitude": 37.77, "longitude": -122.41},
            {"id": "b", "latitude": 0, "longitude": 0},
            {"id": "c", "latitude": 91, "longitude": -122.41},
            {"id": "d", "latitude": None, "longitude": -122.41},
            {"id": "e"},
        ]

        valid = filter_valid_records(records)

        assert [r["id"] for r in valid] == ["a"]

    def test_bounds(self):
        sf = Bounds(37.7, 37.8, -122.6, -122.3)
        records = [
            {"id": "in", "latitude": 37.75, "longitude": -122.45},
            {"id": "out", "latitude": 37.9, "longitude": -122.45},
        ]

        assert [r["id"] for r in filter_valid_records(records, sf)] == ["in"]
        assert within_bounds(37.7, -122.6, sf) is True
