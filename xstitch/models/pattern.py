from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from ..core.types import Difficulty, MatchStrategy, PaletteName


class Thread(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    rgb: Tuple[int, int, int]

    @property
    def hex(self) -> str:
        r, g, b = self.rgb
        return f"#{r:02X}{g:02X}{b:02X}"


class ThreadUsage(BaseModel):
    code: str
    name: str
    rgb: Tuple[int, int, int]
    hex: str
    symbol: str | None = None
    stitch_count: int
    skein_estimate: int


class PatternResult(BaseModel):
    width: int
    height: int
    palette: PaletteName
    max_colors: int
    strategy: MatchStrategy
    matrix: List[List[str]]
    threads: List[ThreadUsage]
    difficulty: Difficulty
    total_stitches: int

    def thread_lookup(self) -> dict[str, ThreadUsage]:
        return {usage.code: usage for usage in self.threads}
