import json
from pathlib import Path

from ..settings import DATA_DIR


class FSStorage:
    def __init__(self, root: str | None = None):
        self.root = Path(root or DATA_DIR)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, path: str) -> Path:
        p = (self.root / path).resolve()
        if self.root.resolve() not in p.parents:
            raise KeyError(path)
        return p

    def save_bytes(self, path: str, data: bytes):
        p = self._path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    def save_json(self, path: str, obj):
        self.save_bytes(path, json.dumps(obj, ensure_ascii=False, indent=2).encode("utf-8"))

    def load_bytes(self, path: str) -> bytes:
        p = self._path(path)
        if not p.is_file():
            raise KeyError(path)
        return p.read_bytes()

    def exists(self, path: str) -> bool:
        try:
            return self._path(path).is_file()
        except KeyError:
            return False
