from __future__ import annotations

import pytest

from xstitch.core.store import PatternStore
from xstitch.storage.fs_storage import FSStorage
from xstitch.storage import make_upload_key


def _fields(**overrides):
    fields = dict(
        name="Rose",
        image_key="uploads/rose.png",
        width=10,
        height=10,
        fabric_type="aida14",
        palette="dmc",
        max_colors=None,
        result={"matrix": [["310"]]},
    )
    fields.update(overrides)
    return fields


def test_create_and_get():
    store = PatternStore()
    record = store.create(**_fields(owner_id=7))
    assert record.id == 1
    fetched = store.get(record.id)
    assert fetched.name == "Rose"
    assert fetched.to_dict()["result"] == {"matrix": [["310"]]}
    assert "result" not in fetched.to_dict(include_result=False)
    assert store.get(99) is None


def test_records_are_copies():
    store = PatternStore()
    record = store.create(**_fields())
    fetched = store.get(record.id)
    fetched.result["matrix"][0][0] = "B5200"
    assert store.get(record.id).result["matrix"][0][0] == "310"


def test_list_by_owner_and_query():
    store = PatternStore()
    store.create(**_fields(owner_id=1, name="Rose"))
    store.create(**_fields(owner_id=2, name="Tulip"))
    store.create(**_fields(owner_id=1, name="Lily"))
    assert [r.name for r in store.list_by_owner(1)] == ["Rose", "Lily"]
    assert [r.name for r in store.list(query="tul")] == ["Tulip"]
    assert len(store.list()) == 3
    store.clear()
    assert store.list() == []


def test_fs_storage_roundtrip(tmp_path):
    storage = FSStorage(str(tmp_path))
    storage.save_bytes("uploads/a.png", b"abc")
    assert storage.exists("uploads/a.png")
    assert storage.load_bytes("uploads/a.png") == b"abc"
    with pytest.raises(KeyError):
        storage.load_bytes("uploads/missing.png")
    with pytest.raises(KeyError):
        storage.load_bytes("../outside.png")
    assert not storage.exists("../outside.png")


def test_upload_key_is_sanitised():
    key = make_upload_key("../My Photo (1).PNG")
    assert key.startswith("uploads/")
    assert key.endswith("-My_Photo_1_.PNG")
    assert "/" not in key[len("uploads/"):]
