from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


def make_case(
    width: int,
    height: int,
    colors: list[tuple[int, int, int]],
    stripe: int = 8,
    transparent_border: int = 0,
) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            color = colors[((x // stripe) + (y // stripe)) % len(colors)]
            canvas[y, x, :3] = color
            canvas[y, x, 3] = 255

    if transparent_border:
        b = transparent_border
        canvas[:b, :, 3] = 0
        canvas[-b:, :, 3] = 0
        canvas[:, :b, 3] = 0
        canvas[:, -b:, 3] = 0

    return canvas


def main() -> None:
    cases_dir = Path("data/bench/cases")
    cases_dir.mkdir(parents=True, exist_ok=True)

    primaries = [(220, 30, 40), (30, 90, 200), (240, 210, 40)]
    rainbow = [
        (int(127 + 127 * np.sin(i / 4.0)), int(127 + 127 * np.sin(i / 4.0 + 2)), int(127 + 127 * np.sin(i / 4.0 + 4)))
        for i in range(40)
    ]

    case_specs = [
        ("case01_basic.png", dict(width=240, height=240, colors=primaries, stripe=20)),
        ("case02_transparent.png", dict(width=200, height=160, colors=primaries, stripe=16, transparent_border=24)),
        ("case03_rainbow.png", dict(width=320, height=320, colors=rainbow, stripe=8)),
    ]

    for name, kwargs in case_specs:
        img = make_case(**kwargs)
        if name.startswith("case03"):
            noise = np.random.randint(-12, 12, size=img.shape[:2] + (3,), dtype=np.int16)
            img[..., :3] = np.clip(img[..., :3].astype(np.int16) + noise, 0, 255).astype(np.uint8)
        Image.fromarray(img).save(cases_dir / name)


if __name__ == "__main__":
    main()
