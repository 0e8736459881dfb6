from __future__ import annotations

import logging
from typing import Any, Iterable

from core.exceptions import (
    AuthenticationError,
    ConcurrencyError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from core.models import Permission, Role
from core.services.auth.policy import parse_permission
from core.services.auth.session import UserSessionContext, UserSessionPrincipal

logger = logging.getLogger(__name__)


def _require_principal(
    user_session: UserSessionContext | None,
    operation_label: str,
) -> UserSessionPrincipal:
    principal = user_session.principal if user_session is not None else None
    if principal is None:
        logger.info("Rejected unauthenticated call to %s", operation_label)
        raise AuthenticationError(f"Authentication required for {operation_label}.")
    return principal


def _deny(principal: UserSessionPrincipal, operation_label: str, missing: list[Permission]) -> None:
    codes = ", ".join(f"'{p.value}'" for p in missing) or "(none specified)"
    logger.info(
        "Permission denied for %s: user=%s role=%s missing=%s",
        operation_label,
        principal.user_id,
        principal.role.value if principal.role else None,
        codes,
    )
    raise PermissionDeniedError(f"Permission denied for {operation_label}. Missing {codes}.")


def require_permission(
    user_session: UserSessionContext | None,
    permission: Permission | str,
    *,
    operation_label: str,
) -> None:
    required = parse_permission(permission)
    principal = _require_principal(user_session, operation_label)
    if required in principal.permissions:
        return
    _deny(principal, operation_label, [required])


def require_any_permission(
    user_session: UserSessionContext | None,
    permissions: Iterable[Permission | str],
    *,
    operation_label: str,
) -> None:
    required = [parse_permission(p) for p in permissions]
    principal = _require_principal(user_session, operation_label)
    if any(p in principal.permissions for p in required):
        return
    _deny(principal, operation_label, required)


def require_all_permissions(
    user_session: UserSessionContext | None,
    permissions: Iterable[Permission | str],
    *,
    operation_label: str,
) -> None:
    required = [parse_permission(p) for p in permissions]
    principal = _require_principal(user_session, operation_label)
    missing = [p for p in required if p not in principal.permissions]
    if not missing:
        return
    _deny(principal, operation_label, missing)


def is_admin_session(user_session: UserSessionContext | None) -> bool:
    principal = user_session.principal if user_session is not None else None
    if principal is None:
        return False
    return principal.role is Role.ADMIN


def status_code_for(error: Any) -> int:
    if isinstance(error, AuthenticationError):
        return 401
    if isinstance(error, PermissionDeniedError):
        return 403
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, ConcurrencyError):
        return 409
    return 500


__all__ = [
    "require_permission",
    "require_any_permission",
    "require_all_permissions",
    "is_admin_session",
    "status_code_for",
]
