"""Unit tests for the JSON file key-value storage."""

import json

import pytest

from hireme.contexts.editing.exceptions import StorageError
from hireme.contexts.editing.storage import JsonFileStorage


@pytest.mark.unit
def test_missing_file_reads_as_empty(tmp_path):
    storage = JsonFileStorage(tmp_path / "missing.json")

    assert storage.get_item("anything") is None


@pytest.mark.unit
def test_set_and_get_item(tmp_path):
    path = tmp_path / "nested" / "store.json"
    storage = JsonFileStorage(path)

    storage.set_item("a", "1")
    storage.set_item("b", "2")

    assert storage.get_item("a") == "1"
    assert storage.get_item("b") == "2"
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1", "b": "2"}


@pytest.mark.unit
def test_write_leaves_no_temp_files(tmp_path):
    storage = JsonFileStorage(tmp_path / "store.json")
    storage.set_item("a", "1")

    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


@pytest.mark.unit
def test_remove_item(tmp_path):
    storage = JsonFileStorage(tmp_path / "store.json")
    storage.set_item("a", "1")
    storage.set_item("b", "2")

    storage.remove_item("a")
    storage.remove_item("not-there")

    assert storage.get_item("a") is None
    assert storage.get_item("b") == "2"


@pytest.mark.unit
def test_invalid_json_raises_storage_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError) as exc_info:
        JsonFileStorage(path).get_item("a")

    assert exc_info.value.path == path


@pytest.mark.unit
def test_non_string_value_raises_storage_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"a": {"nested": True}}), encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get_item("a")


@pytest.mark.unit
def test_set_item_replaces_unreadable_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("garbage", encoding="utf-8")
    storage = JsonFileStorage(path)

    storage.set_item("a", "1")

    assert storage.get_item("a") == "1"


@pytest.mark.unit
def test_unwritable_location_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    storage = JsonFileStorage(blocker / "store.json")

    with pytest.raises(StorageError):
        storage.set_item("a", "1")
