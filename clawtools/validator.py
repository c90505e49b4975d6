"""Basic JSON Schema checks and the validation tools built on them."""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Optional

from clawtools.core import InvalidInputError, SafePermission, Tool, ToolSchema
from clawtools.text_tools import _as_object, _describe, _require_str

_VALIDATION_RESULT_PROPERTIES = {
    "valid": {"type": "boolean"},
    "errors": {"type": "array", "items": {"type": "string"}},
}


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _as_f64(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_u64(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if 0 <= value < 1 << 64:
        return value
    return None


def _json_equal(a: Any, b: Any) -> bool:
    """JSON value equality that keeps booleans, integers and floats apart."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, int) and isinstance(b, int):
        return a == b
    if isinstance(a, float) and isinstance(b, float):
        return a == b
    if isinstance(a, (int, float)) or isinstance(b, (int, float)):
        return False
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_json_equal(a[k], b[k]) for k in a)
    return type(a) is type(b) and a == b


def _fmt_number(x: float) -> str:
    """Render a float the shortest way, without exponent or trailing '.0'."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x.is_integer():
        if x == 0 and math.copysign(1.0, x) < 0:
            return "-0"
        return str(int(x))
    return format(Decimal(repr(x)), "f")


def _format_path(path: str, msg: str, detailed: bool) -> str:
    if not detailed:
        return msg
    return f"root: {msg}" if not path else f"{path}: {msg}"


def validate_against_schema(data: Any, schema: Any, path: str, detailed: bool) -> list[str]:
    """Check ``data`` against the top-level keywords of ``schema``; return error messages."""
    if not isinstance(schema, dict):
        return []
    errors: list[str] = []

    def report(msg: str) -> None:
        errors.append(_format_path(path, msg, detailed))

    type_name = schema.get("type")
    if isinstance(type_name, str):
        data_type = _json_type(data)
        if type_name == "integer" and data_type == "number":
            if isinstance(data, float) and not data.is_integer():
                report("expected integer, got float")
        elif type_name != data_type:
            report(f"expected {type_name}, got {data_type}")

    required = schema.get("required")
    if isinstance(required, list) and isinstance(data, dict):
        for name in required:
            if isinstance(name, str) and name not in data:
                report(f"missing required field: {name}")

    allowed = schema.get("enum")
    if isinstance(allowed, list) and not any(_json_equal(item, data) for item in allowed):
        report("value not in enum")

    number = _as_f64(data)
    minimum = _as_f64(schema.get("minimum"))
    if number is not None and minimum is not None and number < minimum:
        report(f"value {_fmt_number(number)} is less than minimum {_fmt_number(minimum)}")
    maximum = _as_f64(schema.get("maximum"))
    if number is not None and maximum is not None and number > maximum:
        report(f"value {_fmt_number(number)} exceeds maximum {_fmt_number(maximum)}")

    if isinstance(data, str):
        size = len(data.encode("utf-8"))
        min_len = _as_u64(schema.get("minLength"))
        if min_len is not None and size < min_len:
            report(f"string length {size} is less than minLength {min_len}")
        max_len = _as_u64(schema.get("maxLength"))
        if max_len is not None and size > max_len:
            report(f"string length {size} exceeds maxLength {max_len}")
        # "pattern" is accepted but not enforced.

    if isinstance(data, list):
        count = len(data)
        min_items = _as_u64(schema.get("minItems"))
        if min_items is not None and count < min_items:
            report(f"array length {count} is less than minItems {min_items}")
        max_items = _as_u64(schema.get("maxItems"))
        if max_items is not None and count > max_items:
            report(f"array length {count} exceeds maxItems {max_items}")

    return errors


def _require_value(obj: dict, key: str) -> Any:
    if key not in obj:
        raise InvalidInputError(f"missing field `{key}`")
    return obj[key]


class ValidateJsonTool(Tool):
    name = "validate_json"
    description = "Validate JSON data against a JSON Schema (draft-07)"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="JSON validation parameters",
            properties={
                "data": {"type": "string", "description": "JSON data to validate (as string)"},
                "schema": {"type": "string", "description": "JSON Schema (as string)"},
                "detailed_errors": {
                    "type": "boolean",
                    "description": "Return detailed error messages (default: true)",
                },
            },
            required=["data", "schema"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Validation result",
            properties=dict(_VALIDATION_RESULT_PROPERTIES),
            required=["valid"],
        )

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        try:
            obj = _as_object(input, "ValidateJsonInput")
            data = _require_value(obj, "data")
            schema = _require_value(obj, "schema")
            detailed = obj.get("detailed_errors", True)
            if not isinstance(detailed, bool):
                raise InvalidInputError(
                    f"invalid type: {_describe(detailed)}, expected a boolean"
                )
        except InvalidInputError as exc:
            raise InvalidInputError(f"Invalid input: {exc.detail}") from None
        errors = validate_against_schema(data, schema, "", detailed)
        return {"valid": not errors, "errors": errors}


class ValidateToolInputTool(Tool):
    name = "validate_tool_input"
    description = "Validate tool input against the tool's registered schema"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Tool input validation parameters",
            properties={
                "tool_name": {
                    "type": "string",
                    "description": "Name of the tool to validate input for",
                },
                "input": {"type": "string", "description": "JSON input to validate (as string)"},
            },
            required=["tool_name", "input"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Validation result",
            properties=dict(_VALIDATION_RESULT_PROPERTIES),
            required=["valid"],
        )

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        try:
            obj = _as_object(input, "ValidateToolInputInput")
            tool_name = _require_str(obj, "tool_name")
            payload = _require_value(obj, "input")
        except InvalidInputError as exc:
            raise InvalidInputError(f"Invalid input: {exc.detail}") from None
        try:
            json.loads(json.dumps(payload))
        except (TypeError, ValueError) as exc:
            return {"valid": False, "errors": [f"Invalid JSON: {exc}"]}
        return {
            "valid": True,
            "errors": [],
            "note": f"Tool '{tool_name}' schema validation would be performed here",
        }