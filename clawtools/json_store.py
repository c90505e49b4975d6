"""A simple key-value store of JSON values, optionally backed by a file."""

from __future__ import annotations

import copy
import json
import os
import threading
from pathlib import Path
from typing import Any, Optional, Union

from clawtools.core import InvalidInputError, SafePermission, Tool, ToolSchema
from clawtools.text_tools import _as_object, _describe, _require_str


def _load(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return loaded if isinstance(loaded, dict) else {}


class JsonStore:
    """Thread-safe mapping of keys to JSON values, written through to ``path`` if given."""

    def __init__(self, path: Optional[Union[str, os.PathLike]] = None) -> None:
        self._lock = threading.RLock()
        self._path = Path(path) if path is not None else None
        self._data: dict[str, Any] = _load(self._path) if self._path is not None else {}

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``; raises OSError if the file cannot be written."""
        with self._lock:
            self._data[key] = value
            self._persist()

    def get(self, key: str) -> Any:
        """Return a copy of the value under ``key``, or None."""
        with self._lock:
            return copy.deepcopy(self._data.get(key))

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._persist()

    def list_keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def _persist(self) -> None:
        if self._path is None:
            return
        text = json.dumps(self._data, indent=2, ensure_ascii=False)
        self._path.write_text(text, encoding="utf-8")


def _require_value(obj: dict, key: str) -> Any:
    if key not in obj:
        raise InvalidInputError(f"missing field `{key}`")
    return obj[key]


class JsonStoreSetTool(Tool):
    name = "json_store_set"
    description = "Store a JSON value by key"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            properties={
                "key": {"type": "string"},
                "value": {"description": "JSON value to store"},
                "store_path": {"type": "string", "description": "Optional path to store file"},
            },
            required=["key", "value"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(type="object", description="Result")

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        obj = _as_object(input, "JsonStoreSetInput")
        key = _require_str(obj, "key")
        value = _require_value(obj, "value")
        store_path = obj.get("store_path")
        if store_path is not None and not isinstance(store_path, str):
            raise InvalidInputError(f"invalid type: {_describe(store_path)}, expected a string")
        JsonStore().set(key, value)
        return {"success": True, "key": key}


class JsonStoreGetTool(Tool):
    name = "json_store_get"
    description = "Get a JSON value by key"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(type="object", properties={"key": {"type": "string"}}, required=["key"])

    def output_schema(self) -> ToolSchema:
        return ToolSchema(type="object")

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        key = _require_str(_as_object(input, "JsonStoreGetInput"), "key")
        store = JsonStore()
        if key in store.list_keys():
            return {"found": True, "key": key, "value": store.get(key)}
        return {"found": False, "key": key}


class JsonStoreListTool(Tool):
    name = "json_store_list"
    description = "List all keys in the store"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(type="object")

    def output_schema(self) -> ToolSchema:
        return ToolSchema(type="array")

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> list:
        return JsonStore().list_keys()