from __future__ import annotations

from typing import Dict, Iterator, Sequence

PRIMARY_SYMBOLS = list("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
SECONDARY_SYMBOLS = list("0123456789+-=*#@&%$?<>/")


def _symbol_generator() -> Iterator[str]:
    for bucket in (PRIMARY_SYMBOLS, SECONDARY_SYMBOLS):
        for symbol in bucket:
            yield symbol
    idx = 1
    while True:
        yield f"#{idx}"
        idx += 1


def assign_symbols(codes: Sequence[str]) -> Dict[str, str]:
    """Give every distinct thread code a unique chart symbol, in order."""
    generator = _symbol_generator()
    result: Dict[str, str] = {}
    for code in codes:
        if code in result:
            continue
        result[code] = next(generator)
    return result


def contrast_color(rgb: Sequence[int]) -> tuple[int, int, int]:
    """Black or white, whichever reads better on ``rgb``."""
    r, g, b = (int(v) for v in rgb[:3])
    brightness = (r * 299 + g * 587 + b * 114) / 1000
    return (0, 0, 0) if brightness > 125 else (255, 255, 255)
