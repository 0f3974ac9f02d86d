from __future__ import annotations

import copy
import itertools
import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, Iterable, Optional


@dataclass
class PatternRecord:
    id: int
    name: str
    image_key: str
    width: int
    height: int
    fabric_type: str
    palette: str
    max_colors: Optional[int]
    result: dict
    owner_id: Optional[int] = None
    meta: dict = field(default_factory=dict)
    created_at: float = field(default_factory=lambda: time.time())

    def to_dict(self, include_result: bool = True) -> dict:
        data = {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "image_key": self.image_key,
            "width": self.width,
            "height": self.height,
            "fabric_type": self.fabric_type,
            "palette": self.palette,
            "max_colors": self.max_colors,
            "meta": copy.deepcopy(self.meta),
            "created_at": self.created_at,
        }
        if include_result:
            data["result"] = copy.deepcopy(self.result)
        return data


class PatternStore:
    """Process-local keyed storage for saved patterns. Nothing survives a restart."""

    def __init__(self) -> None:
        self._patterns: Dict[int, PatternRecord] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    def create(self, **fields) -> PatternRecord:
        with self._lock:
            record = PatternRecord(id=next(self._ids), **fields)
            self._patterns[record.id] = record
            return copy.deepcopy(record)

    def get(self, pattern_id: int) -> Optional[PatternRecord]:
        with self._lock:
            record = self._patterns.get(pattern_id)
            if not record:
                return None
            return copy.deepcopy(record)

    def list_by_owner(self, owner_id: int) -> Iterable[PatternRecord]:
        with self._lock:
            records = [r for r in self._patterns.values() if r.owner_id == owner_id]
        records.sort(key=lambda r: r.id)
        return [copy.deepcopy(r) for r in records]

    def list(self, *, query: Optional[str] = None) -> Iterable[PatternRecord]:
        with self._lock:
            records = list(self._patterns.values())
        if query:
            query_lower = query.lower()
            records = [
                r
                for r in records
                if query_lower in r.name.lower() or query_lower in r.image_key.lower()
            ]
        records.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return [copy.deepcopy(r) for r in records]

    def clear(self) -> None:
        with self._lock:
            self._patterns.clear()
            self._ids = itertools.count(1)


store = PatternStore()
