"""Core tool abstractions: errors, permission policies, schemas and calls."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any, ClassVar, Optional, Union


class ToolError(Exception):
    """Base class for every failure a tool can report."""

    template: ClassVar[str] = "{}"

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail))


class NotFoundError(ToolError):
    template = "Tool not found: {}"


class PermissionDeniedError(ToolError):
    template = "Permission denied: {}"


class InvalidInputError(ToolError):
    template = "Invalid input: {}"


class ExecutionFailedError(ToolError):
    template = "Execution failed: {}"


class ToolTimeoutError(ToolError):
    template = "Timeout: {} seconds"


class ResourceLimitError(ToolError):
    template = "Resource limit exceeded: {}"


class ToolIOError(ToolError):
    template = "IO error: {}"


def _canonical(path: str) -> PurePath:
    """Resolve ``path`` if it exists, otherwise keep it as written."""
    try:
        return PurePath(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        return PurePath(path)


def _require_text(action: Any, target: Any) -> None:
    """Reject an action or target that is not a string."""
    for label, value in (("action", action), ("target", target)):
        if not isinstance(value, str):
            raise TypeError(f"{label} must be a string, not {type(value).__name__}")


@dataclass
class SafePermission:
    """A permission that allows every action on every target."""

    def check(self, action: str, target: str) -> None:
        _require_text(action, target)


@dataclass
class FilesystemPermission:
    """Access limited to paths below the entries of an allowlist."""

    allowlist: list[str] = field(default_factory=list)
    writable: bool = False

    def check(self, action: str, target: str) -> None:
        target_path = _canonical(target)
        if any(target_path.is_relative_to(_canonical(allowed)) for allowed in self.allowlist):
            return
        raise PermissionDeniedError(f"Path '{target}' not in allowlist")


@dataclass
class ShellPermission:
    """Only commands named in the allowlist may run."""

    allowlist: list[str] = field(default_factory=list)
    arg_pattern: Optional[str] = None

    def check(self, action: str, target: str) -> None:
        if action in self.allowlist:
            return
        raise PermissionDeniedError(f"Command '{action}' not allowed")


@dataclass
class NetworkPermission:
    """Only destinations named in the list may be contacted."""

    destinations: list[str] = field(default_factory=list)
    protocols: list[str] = field(default_factory=list)
    max_connections: int = 0

    def check(self, action: str, target: str) -> None:
        if target in self.destinations:
            return
        raise PermissionDeniedError(f"Destination '{target}' not allowed")


@dataclass
class CustomPermission:
    """A permission checked by an external checker; every action passes here."""

    checker: str = ""
    config: Any = None

    def check(self, action: str, target: str) -> None:
        _require_text(action, target)


ToolPermission = Union[
    SafePermission, FilesystemPermission, ShellPermission, NetworkPermission, CustomPermission
]


@dataclass
class ToolSchema:
    """A JSON-schema-like description of a tool's input or output."""

    type: str
    description: Optional[str] = None
    properties: Optional[Any] = None
    required: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "properties": self.properties,
            "required": self.required,
        }


class Tool(ABC):
    """A named operation taking and returning JSON-compatible values."""

    name: ClassVar[str]
    description: ClassVar[str]

    @abstractmethod
    def input_schema(self) -> ToolSchema:
        """Describe the accepted input."""

    @abstractmethod
    def output_schema(self) -> ToolSchema:
        """Describe the produced output."""

    @abstractmethod
    def permission(self) -> ToolPermission:
        """Return the permission this tool needs."""

    @abstractmethod
    def execute(self, input: Any) -> Any:
        """Run the tool; raise ToolError on failure."""


@dataclass
class ToolCall:
    """A request to run a tool with JSON-encoded arguments."""

    name: str
    arguments: str


@dataclass
class ToolResult:
    """The outcome of a tool call: content or an error message."""

    content: str
    error: Optional[str] = None

    def __str__(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return self.content