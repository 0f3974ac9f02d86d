from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, List, Sequence

from ..models.pattern import Thread, ThreadUsage
from .symbols import assign_symbols
from .types import Difficulty

DEFAULT_STITCHES_PER_SKEIN = 1500


def skein_estimate(stitch_count: int, stitches_per_skein: int = DEFAULT_STITCHES_PER_SKEIN) -> int:
    if stitches_per_skein <= 0:
        raise ValueError("stitches_per_skein must be positive")
    return math.ceil(stitch_count / stitches_per_skein)


def classify_difficulty(color_count: int) -> Difficulty:
    if color_count <= 10:
        return "Simple"
    if color_count <= 20:
        return "Medium"
    return "Hard"


def count_stitches(matrix: Iterable[Iterable[str]]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for row in matrix:
        for code in row:
            if code:
                counts[code] += 1
    return counts


def build_thread_usage(
    matrix: Sequence[Sequence[str]],
    selected: Sequence[Thread],
    stitches_per_skein: int = DEFAULT_STITCHES_PER_SKEIN,
) -> List[ThreadUsage]:
    """Materials list: used threads only, most-stitched first.

    Threads with equal counts keep their selection order.
    """
    counts = count_stitches(matrix)

    usage: List[ThreadUsage] = []
    for thread in selected:
        count = counts.get(thread.code, 0)
        if count <= 0:
            continue
        usage.append(
            ThreadUsage(
                code=thread.code,
                name=thread.name,
                rgb=thread.rgb,
                hex=thread.hex,
                stitch_count=count,
                skein_estimate=skein_estimate(count, stitches_per_skein),
            )
        )
    usage.sort(key=lambda u: u.stitch_count, reverse=True)

    symbols = assign_symbols([u.code for u in usage])
    return [u.model_copy(update={"symbol": symbols[u.code]}) for u in usage]
