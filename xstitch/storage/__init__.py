from __future__ import annotations

import re
import time
from typing import Optional
from uuid import uuid4

from ..settings import STORAGE_BACKEND
from .fs_storage import FSStorage
from .s3_storage import S3Storage


_storage_instance: Optional[object] = None

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def get_storage():
    global _storage_instance
    if _storage_instance is not None:
        return _storage_instance

    backend = STORAGE_BACKEND.lower()
    if backend == "s3":
        _storage_instance = S3Storage()
    else:
        _storage_instance = FSStorage()
    return _storage_instance


def make_upload_key(filename: str | None) -> str:
    """Key for an uploaded source image: ``uploads/<ms>-<uuid8>-<safe name>``."""
    name = _UNSAFE_CHARS.sub("_", (filename or "image").rsplit("/", 1)[-1]).strip("._") or "image"
    return f"uploads/{int(time.time() * 1000)}-{uuid4().hex[:8]}-{name}"


def save_upload(data: bytes, filename: str | None) -> str:
    key = make_upload_key(filename)
    get_storage().save_bytes(key, data)
    return key
