from __future__ import annotations

import json

import pytest

from guidely.storage.local_store import LocalStorage


def test_missing_file_reads_as_empty(tmp_path) -> None:
    s = LocalStorage(str(tmp_path / "nested" / "storage.json"))
    assert s.get_item("token") is None
    assert s.keys() == []
    # Parent directory is created up front.
    assert (tmp_path / "nested").is_dir()


def test_set_items_writes_all_keys_at_once(tmp_path) -> None:
    path = tmp_path / "storage.json"
    s = LocalStorage(str(path))
    s.set_items({"token": "abc", "user": '{"id":"1"}'})

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"token": "abc", "user": '{"id":"1"}'}
    assert LocalStorage(str(path)).get_item("token") == "abc"


def test_remove_items_keeps_other_keys(tmp_path) -> None:
    s = LocalStorage(str(tmp_path / "storage.json"))
    s.set_items({"token": "abc", "user": "{}", "theme": "dark"})
    s.remove_items(["token", "user", "not-there"])
    assert s.keys() == ["theme"]


def test_corrupt_file_reads_as_empty_and_is_replaced_on_write(tmp_path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    s = LocalStorage(str(path))
    assert s.get_item("token") is None

    s.set_items({"token": "abc"})
    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc"}


def test_non_string_values_are_rejected(tmp_path) -> None:
    s = LocalStorage(str(tmp_path / "storage.json"))
    with pytest.raises(TypeError):
        s.set_items({"token": 123})  # type: ignore[dict-item]
    assert s.get_item("token") is None


def test_no_temp_files_left_behind(tmp_path) -> None:
    s = LocalStorage(str(tmp_path / "storage.json"))
    s.set_items({"a": "1"})
    s.remove_items(["a"])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["storage.json"]
