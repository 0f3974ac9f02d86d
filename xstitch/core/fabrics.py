"""Fabric catalogue and finished-size helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import ConfigurationError

CM_PER_INCH = 2.54


@dataclass(frozen=True)
class FabricType:
    id: str
    name: str
    count: int  # stitches per inch


FABRIC_TYPES: Dict[str, FabricType] = {
    f.id: f
    for f in (
        FabricType("aida14", "Aida 14 count", 14),
        FabricType("aida16", "Aida 16 count", 16),
        FabricType("aida18", "Aida 18 count", 18),
        FabricType("evenweave28", "Evenweave 28 count", 28),
        FabricType("evenweave32", "Evenweave 32 count", 32),
        FabricType("linen28", "Linen 28 count", 28),
        FabricType("linen32", "Linen 32 count", 32),
        FabricType("linen36", "Linen 36 count", 36),
        FabricType("linen40", "Linen 40 count", 40),
    )
}

DEFAULT_FABRIC = "aida14"


def get_fabric(fabric_id: str | None) -> FabricType:
    fabric = FABRIC_TYPES.get(fabric_id or DEFAULT_FABRIC)
    if fabric is None:
        raise ConfigurationError(f"Unknown fabric type: {fabric_id!r}", field="fabric_type")
    return fabric


def finished_size(width: int, height: int, fabric_id: str | None = None) -> dict:
    """Stitched design size on the given fabric, in inches and centimetres."""
    fabric = get_fabric(fabric_id)
    w_in = width / fabric.count
    h_in = height / fabric.count
    return {
        "fabric": fabric.id,
        "width_in": round(w_in, 2),
        "height_in": round(h_in, 2),
        "width_cm": round(w_in * CM_PER_INCH, 1),
        "height_cm": round(h_in * CM_PER_INCH, 1),
    }
