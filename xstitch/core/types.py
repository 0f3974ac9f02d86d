"""Common lightweight type aliases used across the pipeline."""

from typing import Literal

PaletteName = Literal["dmc", "anchor", "jpcoats"]
Difficulty = Literal["Simple", "Medium", "Hard"]
MatchStrategy = Literal["tolerance", "assigned"]
PreviewMode = Literal["color", "symbols"]

__all__ = ["PaletteName", "Difficulty", "MatchStrategy", "PreviewMode"]
