import pytest

from oficina.services.formatting import format_brl, format_quantity
from oficina.services.units import convert, normalize_unit


def test_same_unit_is_unchanged():
    assert convert(250, "ml", "ml") == 250


def test_ml_to_litres_and_back():
    assert convert(1500, "ml", "litros") == pytest.approx(1.5)
    assert convert(2, "litros", "ml") == pytest.approx(2000)


def test_aliases():
    assert normalize_unit("L") == "litros"
    assert normalize_unit(" g ") == "gramas"
    assert convert(300, "g", "gramas") == 300


def test_unknown_pair_keeps_quantity(caplog):
    assert convert(3, "folhas", "ml") == 3
    assert "No conversion" in caplog.text


def test_format_brl():
    assert format_brl(55.5) == "R$ 55,50"
    assert format_brl(1234567.891) == "R$ 1.234.567,89"
    assert format_brl(-10) == "-R$ 10,00"


def test_format_quantity():
    assert format_quantity(750.0) == "750"
    assert format_quantity(0.35) == "0.35"
