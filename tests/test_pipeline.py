from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from xstitch.color.palette_loader import load_palette
from xstitch.core.errors import ConfigurationError, ImageLoadError
from xstitch.core.legend import classify_difficulty
from xstitch.core.pipeline import generate_pattern, render_preview, resolve_max_colors
from xstitch.core.quantizer import GreedyPaletteSelector
from tests.utils import make_noise, make_solid, make_stripes, png_bytes

STRIPE_CODES = [
    "321", "666", "349", "606", "608", "740", "741", "444", "307", "704",
    "702", "700", "909", "912", "959", "3845", "996", "3843", "995", "797",
    "820", "333", "552", "550", "718", "917", "915", "3804", "601", "602",
]


def _stripe_image(width=100, height=100):
    by_code = {t.code: t for t in load_palette("dmc")}
    return png_bytes(make_stripes(width, height, [by_code[c].rgb for c in STRIPE_CODES]))


def test_solid_red_uses_one_thread():
    result = generate_pattern(png_bytes(make_solid(2, 2, (255, 0, 0))), 2, 2, "dmc", 10)
    assert result.matrix == [["606", "606"], ["606", "606"]]
    assert len(result.threads) == 1
    usage = result.threads[0]
    assert usage.stitch_count == 4
    assert usage.skein_estimate == 1
    assert usage.symbol == "A"
    assert result.difficulty == "Simple"
    assert result.total_stitches == 4


def test_fully_transparent_image_is_empty():
    result = generate_pattern(png_bytes(make_solid(3, 3, (255, 0, 0), alpha=0)), 3, 3)
    assert result.matrix == [[""] * 3] * 3
    assert result.threads == []
    assert result.total_stitches == 0
    assert result.difficulty == "Simple"


def test_colour_limit_caps_thread_count():
    result = generate_pattern(_stripe_image(), 100, 100, "dmc", 15)
    assert len(result.threads) == 15
    assert result.difficulty == "Medium"
    assert {t.code for t in result.threads} == set(STRIPE_CODES[:15])
    assert result.total_stitches == 100 * 100


def test_matrix_has_requested_shape():
    result = generate_pattern(png_bytes(make_noise(20, 13, seed=1)), 7, 5)
    assert len(result.matrix) == 5
    assert all(len(row) == 7 for row in result.matrix)


@pytest.mark.parametrize("max_colors", [3, 8, 50])
def test_result_invariants(max_colors):
    data = png_bytes(make_noise(30, 24, seed=5, transparent_corner=True))
    result = generate_pattern(data, 15, 12, "dmc", max_colors)

    codes = {t.code for t in result.threads}
    cells = [code for row in result.matrix for code in row]
    assert {c for c in cells if c} <= codes
    assert len(result.threads) <= max_colors
    assert all(t.stitch_count >= 1 for t in result.threads)
    assert sum(t.stitch_count for t in result.threads) == sum(1 for c in cells if c)
    assert result.total_stitches <= 15 * 12
    counts = [t.stitch_count for t in result.threads]
    assert counts == sorted(counts, reverse=True)
    assert result.difficulty == classify_difficulty(len(result.threads))
    assert result.matrix[0][0] == ""  # transparent corner


def test_generation_is_deterministic():
    data = png_bytes(make_noise(32, 32, seed=7))
    first = generate_pattern(data, 16, 16, "anchor", 12)
    second = generate_pattern(data, 16, 16, "anchor", 12)
    assert first.model_dump() == second.model_dump()


def test_accepts_pil_image():
    img = Image.fromarray(make_solid(4, 4, (0, 0, 0)))
    result = generate_pattern(img, 4, 4, "jpcoats")
    assert result.palette == "jpcoats"
    assert len(result.threads) == 1


def test_palette_alias():
    result = generate_pattern(png_bytes(make_solid(2, 2, (10, 10, 10))), 2, 2, "secondary")
    assert result.palette == "anchor"


def test_assigned_strategy_matches_on_exact_colours():
    data = _stripe_image(60, 10)
    tol = generate_pattern(data, 60, 10, max_colors=50)
    assigned = generate_pattern(data, 60, 10, max_colors=50, strategy="assigned")
    assert tol.matrix == assigned.matrix
    assert assigned.strategy == "assigned"


def test_custom_selector_and_skein_size():
    data = png_bytes(make_solid(2, 2, (255, 0, 0)))
    result = generate_pattern(
        data, 2, 2, max_colors=10,
        selector=GreedyPaletteSelector(exclude_selected=True),
        stitches_per_skein=1,
    )
    assert len(result.threads) == 4
    assert all(t.skein_estimate == 1 for t in result.threads)


@pytest.mark.parametrize(
    "value,expected",
    [(None, 50), ("unlimited", 50), ("UNLIMITED", 50), (1, 3), (2, 3), (3, 3), ("15", 15), (50, 50), (80, 50)],
)
def test_resolve_max_colors(value, expected):
    assert resolve_max_colors(value) == expected


@pytest.mark.parametrize("value", [0, -4, "many", True, 2.5])
def test_resolve_max_colors_rejects(value):
    with pytest.raises(ConfigurationError):
        resolve_max_colors(value)


@pytest.mark.parametrize(
    "kwargs,field",
    [
        (dict(width=0, height=10), "width"),
        (dict(width=10, height=-1), "height"),
        (dict(width=10, height=501), "height"),
        (dict(width=10, height=10, palette="sullivans"), "palette"),
        (dict(width=10, height=10, max_colors=0), "max_colors"),
        (dict(width=10, height=10, strategy="fuzzy"), "strategy"),
    ],
)
def test_configuration_errors(kwargs, field):
    data = png_bytes(make_solid(2, 2, (0, 0, 0)))
    with pytest.raises(ConfigurationError) as info:
        generate_pattern(data, **kwargs)
    assert info.value.field == field


def test_configuration_is_checked_before_decoding():
    with pytest.raises(ConfigurationError):
        generate_pattern(b"garbage", 0, 10)


def test_undecodable_image():
    with pytest.raises(ImageLoadError):
        generate_pattern(b"garbage", 10, 10)


@pytest.mark.parametrize("mode", ["color", "symbols"])
def test_render_preview(mode):
    result = generate_pattern(png_bytes(make_noise(12, 8, seed=2)), 6, 4, max_colors=5)
    preview = render_preview(result, mode=mode)
    img = Image.open(io.BytesIO(preview))
    assert img.format == "PNG"
    assert img.size == (6 * 20, 4 * 20)

    from_dict = render_preview(result.model_dump(), mode=mode)
    assert from_dict == preview


def test_zero_stitches_per_skein_is_rejected():
    data = png_bytes(make_solid(2, 2, (0, 0, 0)))
    with pytest.raises(ConfigurationError) as info:
        generate_pattern(data, 2, 2, stitches_per_skein=0)
    assert info.value.field == "stitches_per_skein"


def test_numpy_integers_are_accepted():
    data = png_bytes(make_solid(2, 2, (255, 0, 0)))
    result = generate_pattern(data, np.int64(2), np.int64(2), "dmc", np.int64(10))
    assert (result.width, result.height, result.max_colors) == (2, 2, 10)
    assert type(result.width) is int
    assert result.matrix == [["606", "606"], ["606", "606"]]
