from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from core.exceptions import ValidationError
from core.models import Permission, Role

logger = logging.getLogger(__name__)


PERMISSION_DESCRIPTIONS: dict[Permission, str] = {
    Permission.PROJECT_VIEW: "View projects",
    Permission.PROJECT_CREATE: "Create projects",
    Permission.PROJECT_EDIT: "Edit projects",
    Permission.PROJECT_DELETE: "Delete projects",
    Permission.TASK_VIEW: "View tasks",
    Permission.TASK_CREATE: "Create tasks",
    Permission.TASK_EDIT: "Edit tasks",
    Permission.TASK_DELETE: "Delete tasks",
    Permission.TEAM_VIEW: "View teams",
    Permission.TEAM_CREATE: "Create teams",
    Permission.TEAM_EDIT: "Edit teams",
    Permission.TEAM_DELETE: "Delete teams",
    Permission.RESOURCE_VIEW: "View resources",
    Permission.RESOURCE_CREATE: "Create resources",
    Permission.RESOURCE_EDIT: "Edit resources",
    Permission.RESOURCE_DELETE: "Delete resources",
    Permission.DOCUMENT_VIEW: "View documents",
    Permission.DOCUMENT_CREATE: "Upload documents",
    Permission.DOCUMENT_EDIT: "Edit documents",
    Permission.DOCUMENT_DELETE: "Delete documents",
    Permission.USER_VIEW: "View users",
    Permission.USER_CREATE: "Create users",
    Permission.USER_EDIT: "Edit users and roles",
    Permission.USER_DELETE: "Delete users",
    Permission.REPORT_VIEW: "View reports",
    Permission.REPORT_EXPORT: "Export reports",
    Permission.SETTINGS_VIEW: "View settings",
    Permission.SETTINGS_EDIT: "Edit own settings",
    Permission.SYSTEM_SETTINGS: "Manage system settings",
}


MANAGER_PERMISSIONS: frozenset[Permission] = frozenset(
    {
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
)


MEMBER_PERMISSIONS: frozenset[Permission] = frozenset(
    {
        Permission.PROJECT_VIEW,
        Permission.TASK_VIEW,
        Permission.TASK_CREATE,
        # own tasks only; ownership is checked by the task handlers
        Permission.TASK_EDIT,
        Permission.TEAM_VIEW,
        Permission.RESOURCE_VIEW,
        Permission.DOCUMENT_VIEW,
        Permission.DOCUMENT_CREATE,
        Permission.REPORT_VIEW,
        Permission.SETTINGS_VIEW,
        # own settings only
        Permission.SETTINGS_EDIT,
    }
)


def list_permissions() -> frozenset[Permission]:
    return frozenset(Permission)


def parse_role(value: Any) -> Role | None:
    """Lenient role lookup used for stored or untrusted values.

    Matching ignores case and surrounding whitespace. Anything that is not a
    known role yields ``None``.
    """
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().upper())
    except ValueError:
        logger.debug("Unrecognized role value %r", value)
        return None


def parse_permission(value: Any) -> Permission:
    """Strict permission lookup for enforcement points and configuration."""
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        try:
            return Permission(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError(f"Unknown permission '{value}'.", code="UNKNOWN_PERMISSION")


@dataclass(frozen=True, eq=False)
class RolePolicy:
    """Immutable role to permission map.

    ``ADMIN`` must hold the whole registry and every other role a non-empty
    subset of it. Use :meth:`from_curated` to derive the admin grant instead of
    listing it by hand.
    """

    grants: Mapping[Role, frozenset[Permission]]

    def __post_init__(self) -> None:
        normalized: dict[Role, frozenset[Permission]] = {}
        for role, permissions in dict(self.grants).items():
            role_key = parse_role(role)
            if role_key is None:
                raise ValidationError(f"Unknown role '{role}' in policy.", code="INVALID_ROLE_POLICY")
            normalized[role_key] = frozenset(parse_permission(p) for p in permissions)
        _validate_grants(normalized)
        object.__setattr__(self, "grants", MappingProxyType(normalized))

    @classmethod
    def from_curated(cls, curated: Mapping[Role, Iterable[Permission]]) -> "RolePolicy":
        grants: dict[Role, Iterable[Permission]] = {
            role: permissions for role, permissions in curated.items() if role is not Role.ADMIN
        }
        grants[Role.ADMIN] = list_permissions()
        return cls(grants=grants)

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(self.grants)

    def permissions_for(self, role: Any) -> frozenset[Permission]:
        role_key = parse_role(role)
        if role_key is None:
            return frozenset()
        return self.grants.get(role_key, frozenset())


def _validate_grants(grants: Mapping[Role, frozenset[Permission]]) -> None:
    catalog = list_permissions()
    missing_roles = [role.value for role in Role if role not in grants]
    if missing_roles:
        raise ValidationError(
            f"Role policy is missing roles: {', '.join(sorted(missing_roles))}.",
            code="INVALID_ROLE_POLICY",
        )
    empty_roles = [role.value for role, permissions in grants.items() if not permissions]
    if empty_roles:
        raise ValidationError(
            f"Roles without permissions: {', '.join(sorted(empty_roles))}.",
            code="INVALID_ROLE_POLICY",
        )
    if grants[Role.ADMIN] != catalog:
        raise ValidationError(
            "ADMIN must hold every registered permission.",
            code="INVALID_ROLE_POLICY",
        )


DEFAULT_ROLE_POLICY = RolePolicy.from_curated(
    {
        Role.MANAGER: MANAGER_PERMISSIONS,
        Role.MEMBER: MEMBER_PERMISSIONS,
    }
)


__all__ = [
    "PERMISSION_DESCRIPTIONS",
    "MANAGER_PERMISSIONS",
    "MEMBER_PERMISSIONS",
    "DEFAULT_ROLE_POLICY",
    "RolePolicy",
    "list_permissions",
    "parse_permission",
    "parse_role",
]
