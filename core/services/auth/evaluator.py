from __future__ import annotations

import logging
from typing import Any, Iterable

from core.models import Permission
from core.services.auth.policy import DEFAULT_ROLE_POLICY, RolePolicy

logger = logging.getLogger(__name__)


def coerce_permission(value: Any) -> Permission | None:
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        try:
            return Permission(value.strip().lower())
        except ValueError:
            pass
    logger.debug("Unrecognized permission value %r evaluated as denied", value)
    return None


class PermissionEvaluator:
    """Answers role/permission questions against one injected policy.

    Unknown roles and unknown permission values never raise; they evaluate to
    no access.
    """

    def __init__(self, policy: RolePolicy = DEFAULT_ROLE_POLICY):
        self._policy = policy

    @property
    def policy(self) -> RolePolicy:
        return self._policy

    def permissions_for(self, role: Any) -> frozenset[Permission]:
        return self._policy.permissions_for(role)

    def has_permission(self, role: Any, permission: Any) -> bool:
        perm = coerce_permission(permission)
        if perm is None:
            return False
        return perm in self._policy.permissions_for(role)

    def has_any_permission(self, role: Any, permissions: Iterable[Any]) -> bool:
        granted = self._policy.permissions_for(role)
        return any(coerce_permission(p) in granted for p in permissions)

    def has_all_permissions(self, role: Any, permissions: Iterable[Any]) -> bool:
        # empty input is satisfied
        granted = self._policy.permissions_for(role)
        return all(coerce_permission(p) in granted for p in permissions)


_default_evaluator = PermissionEvaluator()


def permissions_for(role: Any) -> frozenset[Permission]:
    return _default_evaluator.permissions_for(role)


def has_permission(role: Any, permission: Any) -> bool:
    return _default_evaluator.has_permission(role, permission)


def has_any_permission(role: Any, permissions: Iterable[Any]) -> bool:
    return _default_evaluator.has_any_permission(role, permissions)


def has_all_permissions(role: Any, permissions: Iterable[Any]) -> bool:
    return _default_evaluator.has_all_permissions(role, permissions)


__all__ = [
    "PermissionEvaluator",
    "coerce_permission",
    "permissions_for",
    "has_permission",
    "has_any_permission",
    "has_all_permissions",
]
