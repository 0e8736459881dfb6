from __future__ import annotations

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable

from core.models import Permission, Role
from core.services.auth.evaluator import coerce_permission


@dataclass(frozen=True)
class UserSessionPrincipal:
    user_id: str
    email: str
    display_name: str | None
    role: Role | None
    permissions: FrozenSet[Permission]


class UserSessionContext:
    """Holds the acting user for the current request or window.

    Without a principal every check denies.
    """

    def __init__(self):
        self._principal: UserSessionPrincipal | None = None

    @property
    def principal(self) -> UserSessionPrincipal | None:
        return self._principal

    @property
    def role(self) -> Role | None:
        return self._principal.role if self._principal is not None else None

    def set_principal(self, principal: UserSessionPrincipal) -> None:
        self._principal = principal

    def clear(self) -> None:
        self._principal = None

    def is_authenticated(self) -> bool:
        return self._principal is not None

    def has_permission(self, permission: Any) -> bool:
        if self._principal is None:
            return False
        return coerce_permission(permission) in self._principal.permissions

    def has_any_permission(self, permissions: Iterable[Any]) -> bool:
        return any(self.has_permission(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[Any]) -> bool:
        return all(self.has_permission(p) for p in permissions)

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def is_manager(self) -> bool:
        return self.role is Role.MANAGER

    def is_member(self) -> bool:
        return self.role is Role.MEMBER


__all__ = ["UserSessionPrincipal", "UserSessionContext"]
