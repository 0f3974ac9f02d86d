import io
import logging
import operator
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .. import settings
from ..color.palette_loader import load_palette, resolve_palette_name
from ..cv.resampler import load_image, resample_to_grid
from ..models.pattern import PatternResult
from .errors import ConfigurationError
from .grid_mapper import map_grid
from .legend import build_thread_usage, classify_difficulty
from .quantizer import GreedyPaletteSelector, PaletteSelector
from .symbols import contrast_color
from .types import MatchStrategy, PreviewMode

logger = logging.getLogger(__name__)

MIN_COLORS = 3
MAX_COLORS = 50
MAX_PREVIEW_SIDE = 4000  # px


# =====================================================================
#  Validation
# =====================================================================


def _as_int(value, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer", field=name)
    try:
        return operator.index(value)
    except TypeError:
        raise ConfigurationError(f"{name} must be an integer", field=name) from None


def resolve_max_colors(value: Union[int, str, None]) -> int:
    """
    ``None`` / ``"unlimited"`` mean the full budget of 50 threads.
    Positive integers are clamped into [3, 50].
    """
    if value is None:
        return MAX_COLORS
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("", "unlimited"):
            return MAX_COLORS
        try:
            value = int(text)
        except ValueError:
            raise ConfigurationError(
                f"max_colors must be an integer or 'unlimited', got {value!r}",
                field="max_colors",
            ) from None
    value = _as_int(value, "max_colors")
    if value < 1:
        raise ConfigurationError("max_colors must be at least 1", field="max_colors")
    return max(MIN_COLORS, min(MAX_COLORS, value))


def validate_dimensions(width: int, height: int) -> Tuple[int, int]:
    sizes = []
    for name, value in (("width", width), ("height", height)):
        value = _as_int(value, name)
        if value < 1:
            raise ConfigurationError(f"{name} must be at least 1", field=name)
        if value > settings.MAX_GRID_SIDE:
            raise ConfigurationError(
                f"{name} must not exceed {settings.MAX_GRID_SIDE} stitches", field=name
            )
        sizes.append(value)
    return sizes[0], sizes[1]


def resolve_strategy(strategy: Optional[str]) -> MatchStrategy:
    value = (strategy or settings.MATCH_STRATEGY).strip().lower()
    if value not in ("tolerance", "assigned"):
        raise ConfigurationError(f"Unknown match strategy: {strategy!r}", field="strategy")
    return value  # type: ignore[return-value]


# =====================================================================
#  IMAGE → PATTERN
# =====================================================================


def generate_pattern(
    image: Union[bytes, Image.Image],
    width: int,
    height: int,
    palette: Optional[str] = "dmc",
    max_colors: Union[int, str, None] = None,
    *,
    strategy: Optional[str] = None,
    selector: Optional[PaletteSelector] = None,
    stitches_per_skein: Optional[int] = None,
) -> PatternResult:
    """
    Main pipeline:
      1) validate configuration (nothing is decoded before this passes)
      2) decode and resample to one RGBA sample per stitch
      3) greedy palette selection in row-major scan order
      4) map every cell to a thread code
      5) tally stitches, estimate skeins, rate difficulty
    """
    # 1) configuration
    width, height = validate_dimensions(width, height)
    palette_name = resolve_palette_name(palette)
    limit = resolve_max_colors(max_colors)
    match_strategy = resolve_strategy(strategy)
    per_skein = settings.STITCHES_PER_SKEIN if stitches_per_skein is None else stitches_per_skein
    if per_skein <= 0:
        raise ConfigurationError("stitches_per_skein must be positive", field="stitches_per_skein")

    catalogue = load_palette(palette_name)
    if not catalogue:
        raise ConfigurationError(f"Thread palette {palette_name!r} is empty", field="palette")

    # 2) resample
    source = image if isinstance(image, Image.Image) else load_image(image)
    pixels = resample_to_grid(source, width, height)

    # 3) palette selection
    selector = selector or GreedyPaletteSelector()
    selection = selector.select(pixels, catalogue, limit)

    # 4) grid mapping
    matrix = map_grid(selection, strategy=match_strategy)

    # 5) tally & classify
    threads = build_thread_usage(matrix, selection.selected, stitches_per_skein=per_skein)
    difficulty = classify_difficulty(len(threads))
    total = sum(t.stitch_count for t in threads)

    logger.info(
        "Generated %sx%s pattern: palette=%s threads=%s/%s stitches=%s difficulty=%s",
        width,
        height,
        palette_name,
        len(threads),
        limit,
        total,
        difficulty,
    )
    return PatternResult(
        width=width,
        height=height,
        palette=palette_name,
        max_colors=limit,
        strategy=match_strategy,
        matrix=matrix,
        threads=threads,
        difficulty=difficulty,
        total_stitches=total,
    )


# =====================================================================
#  PREVIEW RENDERING
# =====================================================================


def _as_dict(pattern) -> dict:
    if hasattr(pattern, "model_dump"):
        return pattern.model_dump()
    return pattern


def render_preview(pattern: Union[dict, PatternResult], mode: PreviewMode = "color", cell: int = 20) -> bytes:
    """
    Render a PNG preview of the pattern.

    mode:
      - "color":   filled cells with thread colors
      - "symbols": same but with symbol overlay
    """
    pattern_dict = _as_dict(pattern)
    matrix: List[List[str]] = pattern_dict["matrix"]
    h = int(pattern_dict["height"])
    w = int(pattern_dict["width"])

    color_map: Dict[str, Tuple[int, int, int]] = {}
    symbol_map: Dict[str, str] = {}
    for t in pattern_dict.get("threads", []):
        color_map[t["code"]] = tuple(int(c) for c in t["rgb"])
        if t.get("symbol"):
            symbol_map[t["code"]] = t["symbol"]

    cell = max(2, min(cell, MAX_PREVIEW_SIDE // max(w, h, 1)))

    # base white canvas
    img = np.full((h * cell, w * cell, 3), 255, dtype=np.uint8)

    for y, row in enumerate(matrix):
        for x, code in enumerate(row):
            if not code:
                continue
            rgb = color_map.get(code, (200, 200, 200))
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell] = rgb

    # draw grid (light + every 10th darker)
    base_grid = (210, 210, 210)
    accent_grid = (120, 120, 120)

    for x in range(w + 1):
        px = x * cell
        if 0 <= px < img.shape[1]:
            color = accent_grid if x % 10 == 0 else base_grid
            thickness = 2 if x % 10 == 0 else 1
            img[:, px : min(img.shape[1], px + thickness)] = color

    for y in range(h + 1):
        py = y * cell
        if 0 <= py < img.shape[0]:
            color = accent_grid if y % 10 == 0 else base_grid
            thickness = 2 if y % 10 == 0 else 1
            img[py : min(img.shape[0], py + thickness), :] = color

    pil = Image.fromarray(img)

    if mode == "symbols":
        draw = ImageDraw.Draw(pil)
        try:
            font = ImageFont.truetype("DejaVuSans.ttf", max(10, cell - 6))
        except OSError:
            font = ImageFont.load_default()

        for y, row in enumerate(matrix):
            for x, code in enumerate(row):
                symbol = symbol_map.get(code) if code else None
                if not symbol:
                    continue
                fill = contrast_color(color_map.get(code, (200, 200, 200)))
                cx = x * cell + cell // 2
                cy = y * cell + cell // 2
                bbox = draw.textbbox((0, 0), symbol, font=font)
                tw = bbox[2] - bbox[0]
                th = bbox[3] - bbox[1]
                draw.text((cx - tw / 2, cy - th / 2), symbol, fill=fill, font=font)

    buf = io.BytesIO()
    pil.save(buf, format="PNG")
    return buf.getvalue()


def render_pattern_image(pattern: Union[dict, PatternResult], with_symbols: bool = True) -> bytes:
    """
    Convenience wrapper used by exporters: returns PNG bytes.
    """
    mode = "symbols" if with_symbols else "color"
    return render_preview(pattern, mode=mode)
