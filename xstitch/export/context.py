from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from ..color.palette_loader import BRAND_NAMES
from ..core.fabrics import finished_size, get_fabric


def _as_dict(pattern: Any) -> Dict[str, Any]:
    if hasattr(pattern, "model_dump"):
        return pattern.model_dump()
    return copy.deepcopy(pattern)


def rgb_to_hex(rgb) -> str:
    if not rgb:
        return "#FFFFFF"
    r, g, b = (int(v) for v in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def build_export_context(
    pattern: Any,
    *,
    title: Optional[str] = None,
    fabric_type: Optional[str] = None,
    source_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Flatten a pattern result plus record details into what exporters print."""
    pattern_dict = _as_dict(pattern)

    width = int(pattern_dict.get("width", 0) or 0)
    height = int(pattern_dict.get("height", 0) or 0)
    fabric = get_fabric(fabric_type)

    legend = []
    for row in pattern_dict.get("threads") or []:
        item = dict(row)
        item["hex"] = item.get("hex") or rgb_to_hex(item.get("rgb"))
        item["rgb"] = [int(v) for v in item.get("rgb") or (255, 255, 255)]
        legend.append(item)

    palette_name = pattern_dict.get("palette") or "dmc"
    return {
        "title": title or "Cross-Stitch Pattern",
        "source_name": source_name,
        "grid": {"width": width, "height": height},
        "matrix": pattern_dict.get("matrix") or [],
        "legend": legend,
        "brand": BRAND_NAMES.get(palette_name, palette_name),
        "fabric": {"id": fabric.id, "name": fabric.name, "count": fabric.count},
        "finished_size": finished_size(width, height, fabric.id),
        "difficulty": pattern_dict.get("difficulty") or "Simple",
        "palette_size": len(legend),
        "total_stitches": int(
            pattern_dict.get("total_stitches") or sum(r["stitch_count"] for r in legend)
        ),
    }


__all__ = ["build_export_context", "rgb_to_hex"]
