from __future__ import annotations

from typing import Collection, Optional, Sequence

import numpy as np
from sklearn.neighbors import KDTree

from ..models.pattern import Thread

_CHUNK = 4096


def palette_array(palette: Sequence[Thread]) -> np.ndarray:
    return np.array([t.rgb for t in palette], dtype=np.int64).reshape(-1, 3)


def build_kd(palette: Sequence[Thread]) -> Optional[KDTree]:
    if not palette:
        return None
    return KDTree(palette_array(palette).astype(float))


def nearest_index(
    kd: Optional[KDTree],
    rgb: Sequence[int],
    palette: Sequence[Thread],
    exclude: Collection[str] = (),
) -> Optional[int]:
    """Index of the palette thread closest to ``rgb`` (Euclidean RGB).

    Threads whose code is in ``exclude`` are skipped. Equal distances resolve to
    the thread declared first in ``palette``.
    """
    if kd is None or not palette:
        return None

    k = min(len(palette), len(exclude) + 1)
    dist, ind = kd.query([list(rgb)], k=k)
    best = None
    for d, i in zip(dist[0], ind[0]):
        if palette[int(i)].code not in exclude:
            best = float(d)
            break
    if best is None:
        return None

    # The tree gives no ordering guarantee between equidistant points, so
    # re-check every candidate on the best radius with exact integer maths.
    candidates = kd.query_radius([list(rgb)], r=best + 1e-6)[0]
    target = np.asarray(rgb, dtype=np.int64)
    chosen = None
    chosen_sq = None
    for i in sorted(int(c) for c in candidates):
        if palette[i].code in exclude:
            continue
        sq = int(((np.asarray(palette[i].rgb, dtype=np.int64) - target) ** 2).sum())
        if chosen_sq is None or sq < chosen_sq:
            chosen, chosen_sq = i, sq
    return chosen


def nearest_in(colors: np.ndarray, palette_rgb: np.ndarray) -> np.ndarray:
    """Vectorised nearest lookup of many colours against a small palette.

    Returns one palette index per row of ``colors``; ties keep the lowest index.
    """
    colors = np.asarray(colors, dtype=np.int64).reshape(-1, 3)
    out = np.empty(colors.shape[0], dtype=np.int64)
    for start in range(0, colors.shape[0], _CHUNK):
        block = colors[start : start + _CHUNK]
        d = ((block[:, None, :] - palette_rgb[None, :, :]) ** 2).sum(axis=2)
        out[start : start + _CHUNK] = np.argmin(d, axis=1)
    return out


def first_within(colors: np.ndarray, palette_rgb: np.ndarray, tolerance: int) -> np.ndarray:
    """Index of the first palette colour within ``tolerance`` on every channel.

    Rows without such a colour get -1.
    """
    colors = np.asarray(colors, dtype=np.int64).reshape(-1, 3)
    out = np.full(colors.shape[0], -1, dtype=np.int64)
    if palette_rgb.size == 0:
        return out
    for start in range(0, colors.shape[0], _CHUNK):
        block = colors[start : start + _CHUNK]
        close = (np.abs(block[:, None, :] - palette_rgb[None, :, :]) <= tolerance).all(axis=2)
        found = close.any(axis=1)
        first = np.argmax(close, axis=1)
        out[start : start + _CHUNK] = np.where(found, first, -1)
    return out
