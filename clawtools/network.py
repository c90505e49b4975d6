"""Outbound HTTP request and service health-check tools."""

from __future__ import annotations

import json
import time
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from clawtools.core import (
    ExecutionFailedError,
    InvalidInputError,
    NetworkPermission,
    Tool,
    ToolSchema,
)
from clawtools.text_tools import _as_object, _describe, _require_str

_DEFAULT_STATUS = 200
_DEFAULT_HEALTH_TIMEOUT = 5
_DEFAULT_REQUEST_TIMEOUT = 30
_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError, TypeError)


def _uint_field(obj: dict, key: str, default: int, bits: int, type_name: str) -> int:
    if key not in obj:
        return default
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"invalid type: {_describe(value)}, expected {type_name}")
    if not 0 <= value < 1 << bits:
        raise InvalidInputError(f"invalid value: integer `{value}`, expected {type_name}")
    return value


def _require_str_list(obj: dict, key: str) -> list[str]:
    if key not in obj:
        raise InvalidInputError(f"missing field `{key}`")
    value = obj[key]
    if not isinstance(value, list):
        raise InvalidInputError(f"invalid type: {_describe(value)}, expected a sequence")
    for item in value:
        if not isinstance(item, str):
            raise InvalidInputError(f"invalid type: {_describe(item)}, expected a string")
    return list(value)


def _elapsed_ms(start: float) -> float:
    return float(int((time.perf_counter() - start) * 1000))


def _probe(client: httpx.Client, url: str) -> tuple[Optional[int], float, Optional[str]]:
    """HEAD ``url``; return (status or None, elapsed milliseconds, error message or None)."""
    start = time.perf_counter()
    try:
        response = client.head(url)
    except _REQUEST_ERRORS as exc:
        return None, _elapsed_ms(start), str(exc)
    return response.status_code, _elapsed_ms(start), None


def _header_text(raw: bytes) -> str:
    if all(32 <= byte < 127 or byte == 9 for byte in raw):
        return raw.decode("ascii")
    return ""


def _check_url(url: str) -> str:
    """Validate ``url`` as an absolute http(s) URL and return its scheme."""
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid url: {exc}") from None
    if not parts.scheme:
        raise InvalidInputError("Invalid url: relative URL without a base")
    if parts.scheme not in ("http", "https"):
        raise InvalidInputError(f"Unsupported url scheme: {parts.scheme}")
    if not parts.netloc:
        raise InvalidInputError("Invalid url: empty host")
    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidInputError(f"Invalid url: {exc}") from None
    return parts.scheme


class HttpRequestTool(Tool):
    name = "http_request"
    description = "Make an outbound HTTP request (GET/POST/etc.)"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="HTTP request",
            properties={
                "method": {"type": "string"},
                "url": {"type": "string"},
                "headers": {"type": "object", "additionalProperties": {"type": "string"}},
                "body": {"type": ["string", "object", "null"]},
                "timeout_seconds": {"type": "integer"},
            },
            required=["method", "url"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="HTTP response",
            properties={
                "status": {"type": "integer"},
                "headers": {"type": "object"},
                "body": {"type": "string"},
            },
            required=["status", "headers", "body"],
        )

    def permission(self) -> NetworkPermission:
        return NetworkPermission(
            destinations=["*"], protocols=["https", "http"], max_connections=10
        )

    def execute(self, input: Any) -> dict:
        obj = input if isinstance(input, dict) else {}
        method = obj.get("method")
        if not isinstance(method, str):
            raise InvalidInputError("Missing 'method' parameter")
        method = method.upper()
        url = obj.get("url")
        if not isinstance(url, str):
            raise InvalidInputError("Missing 'url' parameter")
        _check_url(url)

        timeout = obj.get("timeout_seconds")
        if isinstance(timeout, bool) or not isinstance(timeout, int) or not 0 <= timeout < 1 << 64:
            timeout = _DEFAULT_REQUEST_TIMEOUT

        if method not in _METHODS:
            raise InvalidInputError(f"Unsupported method: {method}")

        headers = httpx.Headers()
        supplied = obj.get("headers")
        if isinstance(supplied, dict):
            for key, value in supplied.items():
                if isinstance(value, str):
                    headers[key] = value

        content: Optional[bytes] = None
        body = obj.get("body")
        if isinstance(body, str):
            content = body.encode("utf-8")
        elif body is not None:
            content = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
            if "content-type" not in headers:
                headers["content-type"] = "application/json"

        try:
            with httpx.Client(timeout=float(timeout)) as client:
                response = client.request(method, url, headers=headers, content=content)
                body_text = response.text
        except _REQUEST_ERRORS as exc:
            raise ExecutionFailedError(f"request: {exc}") from None

        response_headers = {
            key.decode("latin-1").lower(): _header_text(value)
            for key, value in response.headers.raw
        }
        return {"status": response.status_code, "headers": response_headers, "body": body_text}


class HealthCheckTool(Tool):
    name = "health_check"
    description = "Check if a service is healthy by making an HTTP HEAD request"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Health check parameters",
            properties={
                "url": {"type": "string", "description": "URL to check"},
                "expected_status": {
                    "type": "integer",
                    "description": "Expected HTTP status code (default: 200)",
                },
                "timeout_secs": {
                    "type": "integer",
                    "description": "Request timeout in seconds (default: 5)",
                },
            },
            required=["url"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Health check result",
            properties={
                "healthy": {"type": "boolean"},
                "status_code": {"type": "integer"},
                "response_time_ms": {"type": "number"},
                "error": {"type": "string"},
            },
            required=["healthy"],
        )

    def permission(self) -> NetworkPermission:
        return NetworkPermission(
            destinations=["*"], protocols=["http", "https"], max_connections=10
        )

    def execute(self, input: Any) -> dict:
        try:
            obj = _as_object(input, "HealthCheckInput")
            url = _require_str(obj, "url")
            expected = _uint_field(obj, "expected_status", _DEFAULT_STATUS, 16, "u16")
            timeout = _uint_field(obj, "timeout_secs", _DEFAULT_HEALTH_TIMEOUT, 64, "u64")
        except InvalidInputError as exc:
            raise InvalidInputError(f"Invalid input: {exc.detail}") from None

        with httpx.Client(timeout=float(timeout)) as client:
            status, elapsed, error = _probe(client, url)

        if status is None:
            return {
                "healthy": False,
                "status_code": 0,
                "response_time_ms": elapsed,
                "error": error,
            }
        healthy = status == expected
        return {
            "healthy": healthy,
            "status_code": status,
            "response_time_ms": elapsed,
            "error": "" if healthy else f"Expected {expected}, got {status}",
        }


class BatchHealthCheckTool(Tool):
    name = "batch_health_check"
    description = "Check health of multiple services at once"

    def input_schema(self) -> ToolSchema:
        return ToolSchema(
            type="object",
            description="Batch health check parameters",
            properties={
                "urls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "List of URLs to check",
                },
                "expected_status": {
                    "type": "integer",
                    "description": "Expected HTTP status code (default: 200)",
                },
            },
            required=["urls"],
        )

    def output_schema(self) -> ToolSchema:
        return ToolSchema(type="array", description="Array of health check results")

    def permission(self) -> NetworkPermission:
        return NetworkPermission(
            destinations=["*"], protocols=["http", "https"], max_connections=50
        )

    def execute(self, input: Any) -> list:
        try:
            obj = _as_object(input, "BatchHealthCheckInput")
            urls = _require_str_list(obj, "urls")
            expected = _uint_field(obj, "expected_status", _DEFAULT_STATUS, 16, "u16")
        except InvalidInputError as exc:
            raise InvalidInputError(f"Invalid input: {exc.detail}") from None

        results = []
        with httpx.Client(timeout=float(_DEFAULT_HEALTH_TIMEOUT)) as client:
            for url in urls:
                status, elapsed, error = _probe(client, url)
                if status is None:
                    results.append(
                        {
                            "url": url,
                            "healthy": False,
                            "status_code": 0,
                            "response_time_ms": elapsed,
                            "error": error,
                        }
                    )
                else:
                    results.append(
                        {
                            "url": url,
                            "healthy": status == expected,
                            "status_code": status,
                            "response_time_ms": elapsed,
                        }
                    )
        return results