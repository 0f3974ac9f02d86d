from __future__ import annotations

import logging
from typing import List

import numpy as np

from ..color.palette_matcher import first_within, palette_array
from .errors import ConfigurationError
from .quantizer import SelectionResult, opaque_mask
from .types import MatchStrategy

logger = logging.getLogger(__name__)

MATCH_TOLERANCE = 5


def map_grid(
    selection: SelectionResult,
    strategy: MatchStrategy = "tolerance",
    tolerance: int = MATCH_TOLERANCE,
) -> List[List[str]]:
    """
    Build the pattern matrix (``matrix[y][x]``) from a palette selection.

    strategy:
      - "tolerance": re-match every snapped cell against the selected threads,
        taking the first one within ``tolerance`` on each RGB channel. Cells
        with no such thread stay empty.
      - "assigned": reuse the thread each cell received during selection.
    Transparent cells are always empty.
    """
    snapped = selection.snapped
    h, w = snapped.shape[:2]
    codes = np.array([t.code for t in selection.selected] + [""], dtype=object)

    flat = snapped.reshape(-1, 4)
    opaque = opaque_mask(flat)
    index = np.full(flat.shape[0], -1, dtype=np.int64)

    if strategy == "tolerance":
        if selection.selected and opaque.any():
            index[opaque] = first_within(
                flat[opaque, :3], palette_array(selection.selected), tolerance
            )
    elif strategy == "assigned":
        index = np.where(opaque, selection.assignments.reshape(-1), -1)
    else:
        raise ConfigurationError(f"Unknown match strategy: {strategy!r}", field="strategy")

    misses = int((opaque & (index < 0)).sum())
    if misses:
        logger.debug("%s opaque cells left empty by the %s match", misses, strategy)

    # -1 picks the trailing "" entry
    return codes[index].reshape(h, w).tolist()


__all__ = ["MATCH_TOLERANCE", "map_grid"]
