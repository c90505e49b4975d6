"""Small text utilities: hashing, identifiers, random strings, statistics."""

from __future__ import annotations

import secrets
import string
import time
from typing import Any

from clawtools.core import InvalidInputError, SafePermission, Tool, ToolSchema

_MASK64 = (1 << 64) - 1
_ALPHANUMERIC = string.ascii_lowercase + string.ascii_uppercase + string.digits
_DEFAULT_LENGTH = 32
_MAX_LENGTH = 128


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f'string "{value}"'
    if isinstance(value, list):
        return "sequence"
    return "map"


def _as_object(value: Any, type_name: str) -> dict:
    if not isinstance(value, dict):
        raise InvalidInputError(f"invalid type: {_describe(value)}, expected struct {type_name}")
    return value


def _require_str(obj: dict, key: str) -> str:
    if key not in obj:
        raise InvalidInputError(f"missing field `{key}`")
    value = obj[key]
    if not isinstance(value, str):
        raise InvalidInputError(f"invalid type: {_describe(value)}, expected a string")
    return value


def _rotl(x: int, bits: int) -> int:
    return ((x << bits) | (x >> (64 - bits))) & _MASK64


def _siphash13(data: bytes, k0: int = 0, k1: int = 0) -> int:
    """SipHash-1-3 of ``data`` with the given 64-bit keys."""
    v = [
        k0 ^ 0x736F6D6570736575,
        k1 ^ 0x646F72616E646F6D,
        k0 ^ 0x6C7967656E657261,
        k1 ^ 0x7465646279746573,
    ]

    def sipround() -> None:
        v[0] = (v[0] + v[1]) & _MASK64
        v[1] = _rotl(v[1], 13) ^ v[0]
        v[0] = _rotl(v[0], 32)
        v[2] = (v[2] + v[3]) & _MASK64
        v[3] = _rotl(v[3], 16) ^ v[2]
        v[0] = (v[0] + v[3]) & _MASK64
        v[3] = _rotl(v[3], 21) ^ v[0]
        v[2] = (v[2] + v[1]) & _MASK64
        v[1] = _rotl(v[1], 17) ^ v[2]
        v[2] = _rotl(v[2], 32)

    full = len(data) - len(data) % 8
    for offset in range(0, full, 8):
        m = int.from_bytes(data[offset : offset + 8], "little")
        v[3] ^= m
        sipround()
        v[0] ^= m
    last = ((len(data) & 0xFF) << 56) | int.from_bytes(data[full:], "little")
    v[3] ^= last
    sipround()
    v[0] ^= last
    v[2] ^= 0xFF
    for _ in range(3):
        sipround()
    return v[0] ^ v[1] ^ v[2] ^ v[3]


def _string_hash(text: str) -> int:
    """Hash a string the way the default keyed hasher does: bytes then 0xFF."""
    return _siphash13(text.encode("utf-8") + b"\xff")


def _free_form_schema(type_: str = "object") -> ToolSchema:
    return ToolSchema(type=type_)


class HashTool(Tool):
    name = "hash"
    description = "Hash a string (returns hex digest)"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object", properties={"data": {"type": "string"}}, required=["data"]
        )

    def output_schema(self) -> ToolSchema:
        return _free_form_schema()

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        data = _require_str(_as_object(input, "HashInput"), "data")
        return {"hash": f"{_string_hash(data):016x}", "algorithm": "DefaultHasher"}


class UuidTool(Tool):
    name = "uuid"
    description = "Generate a unique ID"

    def input_schema(self) -> ToolSchema:
        return _free_form_schema()

    def output_schema(self) -> ToolSchema:
        return _free_form_schema()

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        ts = time.time_ns()
        identifier = (
            f"{(ts >> 96) & 0xFFFFFFFF:032x}-{(ts >> 80) & 0xFFFF:04x}-"
            f"{(ts >> 64) & 0xFFFF:04x}-{(ts >> 48) & 0xFFFF:04x}-{ts & 0xFFFFFFFFFFFF:012x}"
        )
        return {"uuid": identifier}


class RandomStringTool(Tool):
    name = "random_string"
    description = "Generate a random alphanumeric string"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object", properties={"length": {"type": "integer", "default": _DEFAULT_LENGTH}}
        )

    def output_schema(self) -> ToolSchema:
        return _free_form_schema()

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        requested = _as_object(input, "RandomStringInput").get("length")
        if requested is None:
            requested = _DEFAULT_LENGTH
        elif isinstance(requested, bool) or not isinstance(requested, int) or requested < 0:
            raise InvalidInputError(f"invalid type: {_describe(requested)}, expected usize")
        length = min(requested, _MAX_LENGTH)
        text = "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))
        return {"random": text, "length": length}


class TextStatsTool(Tool):
    name = "text_stats"
    description = "Get statistics about text (chars, words, lines)"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object", properties={"text": {"type": "string"}}, required=["text"]
        )

    def output_schema(self) -> ToolSchema:
        return _free_form_schema()

    def permission(self) -> SafePermission:
        return SafePermission()

    def execute(self, input: Any) -> dict:
        text = _require_str(_as_object(input, "TextStatsInput"), "text")
        if text:
            lines = text.count("\n") + (0 if text.endswith("\n") else 1)
        else:
            lines = 0
        return {"characters": len(text), "words": len(text.split()), "lines": lines}