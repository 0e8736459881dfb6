from __future__ import annotations

import pytest

from core.exceptions import ValidationError
from core.models import Permission, Role
from core.services.auth.evaluator import PermissionEvaluator
from core.services.auth.policy import (
    DEFAULT_ROLE_POLICY,
    MANAGER_PERMISSIONS,
    MEMBER_PERMISSIONS,
    RolePolicy,
    list_permissions,
    parse_permission,
    parse_role,
)


def test_admin_holds_every_registered_permission():
    assert DEFAULT_ROLE_POLICY.permissions_for(Role.ADMIN) == list_permissions()


def test_every_role_maps_to_a_non_empty_set():
    assert DEFAULT_ROLE_POLICY.roles == frozenset(Role)
    for role in Role:
        assert DEFAULT_ROLE_POLICY.permissions_for(role)


def test_manager_policy_is_pinned():
    assert DEFAULT_ROLE_POLICY.permissions_for(Role.MANAGER) == MANAGER_PERMISSIONS
    assert MANAGER_PERMISSIONS == {
        Permission.PROJECT_VIEW,
        Permission.PROJECT_CREATE,
        Permission.PROJECT_EDIT,
        Permission.TASK_VIEW,
        Permission.TASK_CREATE,
        Permission.TASK_EDIT,
        Permission.TASK_DELETE,
        Permission.TEAM_VIEW,
        Permission.TEAM_CREATE,
        Permission.TEAM_EDIT,
        Permission.RESOURCE_VIEW,
        Permission.RESOURCE_CREATE,
        Permission.RESOURCE_EDIT,
        Permission.DOCUMENT_VIEW,
        Permission.DOCUMENT_CREATE,
        Permission.DOCUMENT_EDIT,
        Permission.USER_VIEW,
        Permission.REPORT_VIEW,
        Permission.REPORT_EXPORT,
        Permission.SETTINGS_VIEW,
        Permission.SETTINGS_EDIT,
    }


def test_member_policy_is_pinned():
    assert DEFAULT_ROLE_POLICY.permissions_for(Role.MEMBER) == MEMBER_PERMISSIONS
    assert MEMBER_PERMISSIONS == {
        Permission.PROJECT_VIEW,
        Permission.TASK_VIEW,
        Permission.TASK_CREATE,
        Permission.TASK_EDIT,
        Permission.TEAM_VIEW,
        Permission.RESOURCE_VIEW,
        Permission.DOCUMENT_VIEW,
        Permission.DOCUMENT_CREATE,
        Permission.REPORT_VIEW,
        Permission.SETTINGS_VIEW,
        Permission.SETTINGS_EDIT,
    }


def test_manager_has_no_deletes_outside_tasks_and_view_only_users():
    manager = DEFAULT_ROLE_POLICY.permissions_for(Role.MANAGER)

    deletes = {p for p in manager if p.action == "delete"}
    assert deletes == {Permission.TASK_DELETE}
    assert {p for p in manager if p.resource == "user"} == {Permission.USER_VIEW}
    assert Permission.SYSTEM_SETTINGS not in manager


@pytest.mark.parametrize("value", ["admin", "ADMIN", " Admin ", Role.ADMIN])
def test_role_lookup_ignores_case_and_whitespace(value):
    assert DEFAULT_ROLE_POLICY.permissions_for(value) == list_permissions()


@pytest.mark.parametrize("value", [None, "", "   ", "SUPERUSER", "root", 42, object(), "ADMIN;"])
def test_unknown_roles_fail_closed(value):
    assert parse_role(value) is None
    assert DEFAULT_ROLE_POLICY.permissions_for(value) == frozenset()


def test_policy_grants_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_ROLE_POLICY.grants[Role.MEMBER] = list_permissions()  # type: ignore[index]
    with pytest.raises(AttributeError):
        DEFAULT_ROLE_POLICY.permissions_for(Role.MEMBER).add(Permission.USER_DELETE)  # type: ignore[attr-defined]


def test_from_curated_derives_admin_from_registry():
    policy = RolePolicy.from_curated(
        {
            Role.ADMIN: {Permission.PROJECT_VIEW},
            Role.MANAGER: {Permission.PROJECT_VIEW, Permission.PROJECT_EDIT},
            Role.MEMBER: {Permission.PROJECT_VIEW},
        }
    )

    assert policy.permissions_for(Role.ADMIN) == list_permissions()
    assert policy.permissions_for(Role.MANAGER) == {Permission.PROJECT_VIEW, Permission.PROJECT_EDIT}


def test_policy_accepts_permission_strings_from_configuration():
    policy = RolePolicy.from_curated(
        {
            Role.MANAGER: ["project:view", "Project:Edit"],
            Role.MEMBER: ["project:view"],
        }
    )

    assert policy.permissions_for("manager") == {Permission.PROJECT_VIEW, Permission.PROJECT_EDIT}


def test_policy_rejects_missing_roles():
    with pytest.raises(ValidationError, match="missing roles: MEMBER") as exc:
        RolePolicy.from_curated({Role.MANAGER: {Permission.PROJECT_VIEW}})
    assert exc.value.code == "INVALID_ROLE_POLICY"


def test_policy_rejects_empty_roles():
    with pytest.raises(ValidationError, match="without permissions: MEMBER"):
        RolePolicy.from_curated({Role.MANAGER: {Permission.PROJECT_VIEW}, Role.MEMBER: set()})


def test_policy_rejects_partial_admin_grant():
    with pytest.raises(ValidationError, match="ADMIN must hold every registered permission"):
        RolePolicy(
            grants={
                Role.ADMIN: {Permission.PROJECT_VIEW},
                Role.MANAGER: {Permission.PROJECT_VIEW},
                Role.MEMBER: {Permission.PROJECT_VIEW},
            }
        )


def test_policy_rejects_unknown_roles_and_permissions():
    with pytest.raises(ValidationError) as role_exc:
        RolePolicy(grants={"OWNER": list_permissions()})
    assert role_exc.value.code == "INVALID_ROLE_POLICY"

    with pytest.raises(ValidationError) as perm_exc:
        RolePolicy.from_curated({Role.MANAGER: ["project:archive"], Role.MEMBER: ["project:view"]})
    assert perm_exc.value.code == "UNKNOWN_PERMISSION"


def test_alternate_policy_can_be_injected_without_touching_the_default():
    narrow = RolePolicy.from_curated(
        {
            Role.MANAGER: {Permission.PROJECT_VIEW},
            Role.MEMBER: {Permission.PROJECT_VIEW},
        }
    )
    evaluator = PermissionEvaluator(narrow)

    assert evaluator.policy is narrow
    assert not evaluator.has_permission(Role.MEMBER, Permission.TASK_CREATE)
    assert DEFAULT_ROLE_POLICY.permissions_for(Role.MEMBER) == MEMBER_PERMISSIONS


def test_parse_permission_is_strict():
    assert parse_permission(" TASK:View ") is Permission.TASK_VIEW
    assert parse_permission(Permission.TEAM_EDIT) is Permission.TEAM_EDIT
    for bad in ("task:archive", "", None, 7):
        with pytest.raises(ValidationError) as exc:
            parse_permission(bad)
        assert exc.value.code == "UNKNOWN_PERMISSION"
