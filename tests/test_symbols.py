from __future__ import annotations

from xstitch.core.symbols import assign_symbols, contrast_color


def test_assign_symbols_produces_unique_values():
    codes = [str(i) for i in range(60)]
    assigned = assign_symbols(codes)
    symbols = list(assigned.values())
    assert len(symbols) == len(set(symbols)) == 60
    assert assigned["0"] == "A"
    assert assigned["26"] == "0"
    assert assigned["59"] == "#11"


def test_repeated_codes_share_a_symbol():
    assert assign_symbols(["x", "y", "x"]) == {"x": "A", "y": "B"}


def test_contrast_color():
    assert contrast_color((255, 255, 255)) == (0, 0, 0)
    assert contrast_color((0, 0, 0)) == (255, 255, 255)
    assert contrast_color((19, 71, 125)) == (255, 255, 255)
