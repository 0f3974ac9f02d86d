from __future__ import annotations

import base64
import csv
import io
import json

import pytest

from xstitch.core.errors import ConfigurationError
from xstitch.core.pipeline import generate_pattern
from xstitch.export import export_csv, export_json, export_pdf
from xstitch.export.context import build_export_context, rgb_to_hex
from xstitch.export.pdf_exporter import grid_cell_size, plan_sections
from tests.utils import make_noise, png_bytes


def _pattern(width=12, height=10, **kwargs):
    return generate_pattern(png_bytes(make_noise(24, 20, seed=11)), width, height, **kwargs)


def test_rgb_to_hex():
    assert rgb_to_hex((255, 0, 16)) == "#FF0010"
    assert rgb_to_hex(None) == "#FFFFFF"


def test_export_context():
    pattern = _pattern(max_colors=6)
    ctx = build_export_context(pattern, title="Sunset", fabric_type="aida18")
    assert ctx["title"] == "Sunset"
    assert ctx["brand"] == "DMC"
    assert ctx["fabric"]["count"] == 18
    assert ctx["grid"] == {"width": 12, "height": 10}
    assert ctx["palette_size"] == len(pattern.threads)
    assert ctx["total_stitches"] == pattern.total_stitches


def test_export_context_unknown_fabric():
    with pytest.raises(ConfigurationError):
        build_export_context(_pattern(), fabric_type="burlap")


def test_grid_cell_size():
    assert grid_cell_size(50, 50) == 3.0
    assert grid_cell_size(51, 10) == 2.0
    assert grid_cell_size(100, 100) == 2.0
    assert grid_cell_size(101, 10) == 1.5


def test_plan_sections():
    plan = plan_sections(100, 100, 2.0)
    assert plan["cols_per_page"] == 95
    assert plan["rows_per_page"] == 125
    assert (plan["pages_x"], plan["pages_y"], plan["pages"]) == (2, 1, 2)

    single = plan_sections(40, 40, 3.0)
    assert single["pages"] == 1


def test_csv_materials_list():
    pattern = _pattern(max_colors=5)
    rows = list(csv.reader(io.StringIO(export_csv(pattern))))
    assert rows[0] == ["symbol", "brand", "code", "name", "hex", "stitches", "skeins"]
    body = rows[1:]
    assert len(body) == len(pattern.threads)
    first = pattern.threads[0]
    assert body[0] == [
        first.symbol, "DMC", first.code, first.name, first.hex,
        str(first.stitch_count), str(first.skein_estimate),
    ]


def test_json_export_carries_preview():
    pattern = _pattern(6, 4, max_colors=4)
    payload = json.loads(export_json(pattern))
    assert payload["width"] == 6
    assert payload["matrix"] == pattern.matrix
    assert base64.b64decode(payload["preview_png"]).startswith(b"\x89PNG")


@pytest.mark.parametrize("size", [(12, 10), (120, 60)])
def test_pdf_export(size):
    pattern = _pattern(*size, max_colors=8)
    cover = png_bytes(make_noise(16, 16, seed=4))
    pdf = export_pdf(pattern, title="Test", fabric_type="aida14", source_name="noise.png", image=cover)
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_pdf_export_from_stored_dict_without_cover():
    pattern = _pattern(max_colors=3)
    pdf = export_pdf(pattern.model_dump())
    assert pdf.startswith(b"%PDF")
