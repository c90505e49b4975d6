"""Permission kinds and the allow/deny set consulted before running a tool."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


class Permission(Enum):
    """Fixed permission kinds."""

    READ_FILE = "ReadFile"
    WRITE_FILE = "WriteFile"
    EXECUTE_COMMAND = "ExecuteCommand"
    NETWORK_ACCESS = "NetworkAccess"
    SPAWN_PROCESS = "SpawnProcess"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FileSystemAccess:
    """Access to one filesystem path."""

    path: str

    def __str__(self) -> str:
        return f"FileSystemAccess({json.dumps(self.path, ensure_ascii=False)})"


PermissionKind = Union[Permission, FileSystemAccess]


class PermissionCheckError(Exception):
    """Base class for permission and tool failures during execution."""

    template: ClassVar[str] = "{}"

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail))


class PermissionDenied(PermissionCheckError):
    template = "permission denied: {}"


class PermissionRefused(PermissionCheckError):
    template = "permission refused: {}"


class ToolFailure(PermissionCheckError):
    template = "tool error: {}"


class PermissionSet:
    """Explicitly allowed and denied permissions; anything else is refused."""

    def __init__(self) -> None:
        self._allowed: set[PermissionKind] = set()
        self._denied: set[PermissionKind] = set()

    def allow(self, perm: PermissionKind) -> None:
        self._allowed.add(perm)
        self._denied.discard(perm)

    def deny(self, perm: PermissionKind) -> None:
        self._denied.add(perm)
        self._allowed.discard(perm)

    def is_allowed(self, perm: PermissionKind) -> bool:
        return perm in self._allowed and perm not in self._denied

    def check(self, perm: PermissionKind) -> None:
        """Raise unless ``perm`` has been explicitly allowed."""
        if perm in self._denied:
            raise PermissionDenied(f"{perm} is denied")
        if perm not in self._allowed:
            raise PermissionRefused(f"{perm} is not explicitly allowed")

    def __repr__(self) -> str:
        return f"PermissionSet(allowed={self._allowed!r}, denied={self._denied!r})"