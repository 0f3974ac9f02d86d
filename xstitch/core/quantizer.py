from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..color.palette_matcher import build_kd, nearest_in, nearest_index, palette_array
from ..models.pattern import Thread

logger = logging.getLogger(__name__)

ALPHA_THRESHOLD = 128


@dataclass
class SelectionResult:
    selected: List[Thread]
    snapped: np.ndarray  # (H, W, 4) uint8, opaque cells carry their thread colour
    assignments: np.ndarray  # (H, W) index into ``selected``, -1 when unassigned


def opaque_mask(pixels: np.ndarray) -> np.ndarray:
    return pixels[..., 3] >= ALPHA_THRESHOLD


class PaletteSelector(ABC):
    """Chooses a bounded set of threads for a resampled pixel grid."""

    @abstractmethod
    def select(
        self,
        pixels: np.ndarray,
        catalogue: Sequence[Thread],
        max_colors: int,
    ) -> SelectionResult:
        raise NotImplementedError


class GreedyPaletteSelector(PaletteSelector):
    """
    Single pass over the opaque cells in row-major order.

    While the palette has room, each cell takes the nearest catalogue thread and
    that thread joins the palette if it is not there yet. Once the palette is
    full, the remaining cells are snapped to the nearest selected thread.
    The outcome depends on scan order: threads met first always win a slot.

    exclude_selected:
        skip threads that are already selected when searching the catalogue, so
        every opaque cell claims a fresh thread until the palette is full.
    """

    def __init__(self, exclude_selected: bool = False) -> None:
        self.exclude_selected = exclude_selected

    def select(
        self,
        pixels: np.ndarray,
        catalogue: Sequence[Thread],
        max_colors: int,
    ) -> SelectionResult:
        h, w = pixels.shape[:2]
        flat = pixels.reshape(-1, 4)
        snapped = flat.copy()
        assignments = np.full(flat.shape[0], -1, dtype=np.int64)

        order = np.flatnonzero(flat[:, 3] >= ALPHA_THRESHOLD)
        if self.exclude_selected:
            selected, processed = self._claim_fresh(flat, order, catalogue, max_colors, assignments)
        else:
            selected, processed = self._claim_nearest(flat, order, catalogue, max_colors, assignments)

        remaining = order[processed:]
        if remaining.size and selected:
            assignments[remaining] = nearest_in(flat[remaining, :3], palette_array(selected))

        if selected:
            sel_rgb = palette_array(selected).astype(np.uint8)
            hit = assignments >= 0
            snapped[hit, :3] = sel_rgb[assignments[hit]]

        logger.debug(
            "Selected %s threads (%s cells scanned before the palette filled)",
            len(selected),
            processed,
        )
        return SelectionResult(
            selected=selected,
            snapped=snapped.reshape(h, w, 4),
            assignments=assignments.reshape(h, w),
        )

    @staticmethod
    def _claim_nearest(
        flat: np.ndarray,
        order: np.ndarray,
        catalogue: Sequence[Thread],
        max_colors: int,
        assignments: np.ndarray,
    ) -> Tuple[List[Thread], int]:
        if not order.size or not catalogue or max_colors <= 0:
            return [], 0

        # one catalogue lookup per distinct colour, then expand back to scan order
        colors, inverse = np.unique(flat[order, :3], axis=0, return_inverse=True)
        per_cell = nearest_in(colors, palette_array(catalogue))[inverse.reshape(-1)]

        codes, first_seen = np.unique(per_cell, return_index=True)
        seen_order = np.argsort(first_seen, kind="stable")
        chosen = codes[seen_order][:max_colors]
        if codes.size > max_colors:
            processed = int(first_seen[seen_order][max_colors - 1]) + 1
        else:
            processed = int(order.size)

        position = np.full(len(catalogue), -1, dtype=np.int64)
        position[chosen] = np.arange(chosen.size)
        assignments[order[:processed]] = position[per_cell[:processed]]
        return [catalogue[int(i)] for i in chosen], processed

    @staticmethod
    def _claim_fresh(
        flat: np.ndarray,
        order: np.ndarray,
        catalogue: Sequence[Thread],
        max_colors: int,
        assignments: np.ndarray,
    ) -> Tuple[List[Thread], int]:
        selected: List[Thread] = []
        positions: Dict[str, int] = {}
        kd = build_kd(catalogue)
        limit = min(max_colors, len(catalogue))

        processed = 0
        for idx in order:
            if len(selected) >= limit:
                break
            processed += 1
            rgb = (int(flat[idx, 0]), int(flat[idx, 1]), int(flat[idx, 2]))
            match = nearest_index(kd, rgb, catalogue, exclude=positions)
            if match is None:
                continue
            thread = catalogue[match]
            positions[thread.code] = len(selected)
            selected.append(thread)
            assignments[idx] = positions[thread.code]
        return selected, processed


__all__ = [
    "ALPHA_THRESHOLD",
    "GreedyPaletteSelector",
    "PaletteSelector",
    "SelectionResult",
    "opaque_mask",
]
