from __future__ import annotations

import io
from typing import Sequence, Tuple

import numpy as np
from PIL import Image


def png_bytes(arr: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


def make_solid(width: int, height: int, rgb: Tuple[int, int, int], alpha: int = 255) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[..., :3] = rgb
    canvas[..., 3] = alpha
    return canvas


def make_stripes(width: int, height: int, colors: Sequence[Tuple[int, int, int]]) -> np.ndarray:
    """Vertical stripes of equal width, one per colour, fully opaque."""
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    for x in range(width):
        canvas[:, x, :3] = colors[x * len(colors) // width]
    canvas[..., 3] = 255
    return canvas


def make_noise(width: int, height: int, seed: int = 0, transparent_corner: bool = False) -> np.ndarray:
    rng = np.random.default_rng(seed)
    canvas = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    canvas[..., 3] = 255
    if transparent_corner:
        canvas[: height // 3, : width // 3, 3] = 0
    return canvas
