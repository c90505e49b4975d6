import json

import pytest

from clawtools.core import InvalidInputError, SafePermission
from clawtools.json_store import (
    JsonStore,
    JsonStoreGetTool,
    JsonStoreListTool,
    JsonStoreSetTool,
)


def test_set_get_delete_in_memory():
    store = JsonStore()
    store.set("a", {"x": [1, 2]})
    assert store.get("a") == {"x": [1, 2]}
    assert store.list_keys() == ["a"]
    store.delete("a")
    assert store.get("a") is None
    assert store.list_keys() == []


def test_get_missing_is_none():
    assert JsonStore().get("nope") is None


def test_get_returns_copy():
    store = JsonStore()
    store.set("a", {"x": [1]})
    fetched = store.get("a")
    fetched["x"].append(2)
    assert store.get("a") == {"x": [1]}


def test_delete_missing_key_is_harmless():
    store = JsonStore()
    store.set("a", 1)
    store.delete("b")
    assert store.list_keys() == ["a"]


def test_persists_to_file(tmp_path):
    path = tmp_path / "store.json"
    store = JsonStore(path)
    store.set("name", "widget")
    store.set("count", 3)
    assert json.loads(path.read_text(encoding="utf-8")) == {"name": "widget", "count": 3}

    reopened = JsonStore(path)
    assert reopened.get("name") == "widget"
    assert sorted(reopened.list_keys()) == ["count", "name"]


def test_delete_persists(tmp_path):
    path = tmp_path / "store.json"
    store = JsonStore(path)
    store.set("a", 1)
    store.delete("a")
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("not json", encoding="utf-8")
    assert JsonStore(path).list_keys() == []


def test_non_object_file_loads_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonStore(path).list_keys() == []


def test_missing_file_starts_empty(tmp_path):
    store = JsonStore(tmp_path / "absent.json")
    assert store.list_keys() == []
    assert not (tmp_path / "absent.json").exists()


def test_write_failure_raises(tmp_path):
    store = JsonStore(tmp_path / "missing_dir" / "store.json")
    with pytest.raises(OSError):
        store.set("a", 1)


def test_set_tool_reports_key():
    result = JsonStoreSetTool().execute({"key": "k", "value": [1, 2]})
    assert result == {"success": True, "key": "k"}


def test_set_tool_accepts_null_value_and_path():
    result = JsonStoreSetTool().execute({"key": "k", "value": None, "store_path": None})
    assert result["success"] is True


def test_set_tool_missing_value():
    with pytest.raises(InvalidInputError, match="missing field `value`"):
        JsonStoreSetTool().execute({"key": "k"})


def test_set_tool_bad_store_path():
    with pytest.raises(InvalidInputError):
        JsonStoreSetTool().execute({"key": "k", "value": 1, "store_path": 5})


def test_get_tool_uses_fresh_store():
    JsonStoreSetTool().execute({"key": "k", "value": 1})
    assert JsonStoreGetTool().execute({"key": "k"}) == {"found": False, "key": "k"}


def test_get_tool_missing_key():
    with pytest.raises(InvalidInputError, match="missing field `key`"):
        JsonStoreGetTool().execute({})


def test_list_tool_is_empty():
    assert JsonStoreListTool().execute({}) == []


def test_tool_schemas():
    assert JsonStoreSetTool().input_schema().required == ["key", "value"]
    assert JsonStoreGetTool().input_schema().required == ["key"]
    assert JsonStoreListTool().output_schema().type == "array"
    assert JsonStoreListTool().permission() == SafePermission()