from __future__ import annotations

from typing import Any

from core.exceptions import NotFoundError
from core.interfaces import UserRepository
from core.models import Permission, Role, UserAccount
from core.services.auth.evaluator import PermissionEvaluator


class AuthQueryMixin:
    _user_repo: UserRepository
    _evaluator: PermissionEvaluator

    def get_user_role(self, user_id: str) -> Role | None:
        return self._require_user(user_id).role

    def get_user_permissions(self, user_id: str) -> frozenset[Permission]:
        user = self._require_user(user_id)
        if not user.is_active:
            return frozenset()
        return self._evaluator.permissions_for(user.role)

    def has_permission(self, user_id: str, permission: Any) -> bool:
        user = self._require_user(user_id)
        return user.is_active and self._evaluator.has_permission(user.role, permission)

    def _require_user(self, user_id: str) -> UserAccount:
        user = self._user_repo.get(user_id)
        if not user:
            raise NotFoundError("User not found.", code="USER_NOT_FOUND")
        return user
