# -*- coding: utf-8 -*-
"""
Тесты для core/utils/validator.py
"""
import pytest

from core.utils.validator import sanitize_place_query, validate_coordinates


def test_sanitize_place_query():
    assert sanitize_place_query("  Paris  ") == "Paris"
    assert sanitize_place_query("New\t  York") == "New York"
    assert sanitize_place_query("São Paulo") == "São Paulo"
    assert sanitize_place_query("Санкт-Петербург") == "Санкт-Петербург"
    assert sanitize_place_query("Ber\x00lin") == "Ber lin"
    assert sanitize_place_query("   ") == ""
    assert len(sanitize_place_query("x" * 500)) == 100


def test_sanitize_rejects_non_string():
    with pytest.raises(ValueError):
        sanitize_place_query(None)


def test_validate_coordinates():
    assert validate_coordinates(55.75, 37.62) is True
    assert validate_coordinates("55.75", "37.62") is True
    assert validate_coordinates(91, 0) is False
    assert validate_coordinates(0, 181) is False
    assert validate_coordinates("invalid", 0) is False
