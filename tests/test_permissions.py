import pytest

from clawtools.permissions import (
    FileSystemAccess,
    Permission,
    PermissionCheckError,
    PermissionDenied,
    PermissionRefused,
    PermissionSet,
    ToolFailure,
)


def test_empty_set_refuses():
    perms = PermissionSet()
    assert not perms.is_allowed(Permission.READ_FILE)
    with pytest.raises(PermissionRefused) as info:
        perms.check(Permission.READ_FILE)
    assert "is not explicitly allowed" in str(info.value)


def test_allow_then_check_passes():
    perms = PermissionSet()
    perms.allow(Permission.NETWORK_ACCESS)
    assert perms.is_allowed(Permission.NETWORK_ACCESS)
    assert perms.check(Permission.NETWORK_ACCESS) is None
    assert not perms.is_allowed(Permission.READ_FILE)


def test_deny_overrides_allow():
    perms = PermissionSet()
    perms.allow(Permission.WRITE_FILE)
    perms.deny(Permission.WRITE_FILE)
    assert not perms.is_allowed(Permission.WRITE_FILE)
    with pytest.raises(PermissionDenied) as info:
        perms.check(Permission.WRITE_FILE)
    assert str(info.value) == "permission denied: WriteFile is denied"


def test_allow_after_deny_restores():
    perms = PermissionSet()
    perms.deny(Permission.SPAWN_PROCESS)
    perms.allow(Permission.SPAWN_PROCESS)
    assert perms.is_allowed(Permission.SPAWN_PROCESS)


def test_filesystem_access_compares_by_path():
    perms = PermissionSet()
    perms.allow(FileSystemAccess("/tmp"))
    assert perms.is_allowed(FileSystemAccess("/tmp"))
    assert not perms.is_allowed(FileSystemAccess("/var"))


def test_filesystem_access_message_quotes_path():
    perms = PermissionSet()
    perms.deny(FileSystemAccess("/srv"))
    with pytest.raises(PermissionDenied) as info:
        perms.check(FileSystemAccess("/srv"))
    assert 'FileSystemAccess("/srv") is denied' in str(info.value)


def test_error_hierarchy_and_messages():
    assert isinstance(PermissionDenied("x"), PermissionCheckError)
    assert isinstance(ToolFailure("x"), PermissionCheckError)
    assert str(PermissionRefused("x")) == "permission refused: x"