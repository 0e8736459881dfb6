from core.services.auth.authorization import (
    is_admin_session,
    require_all_permissions,
    require_any_permission,
    require_permission,
    status_code_for,
)
from core.services.auth.evaluator import (
    PermissionEvaluator,
    has_all_permissions,
    has_any_permission,
    has_permission,
    permissions_for,
)
from core.services.auth.policy import DEFAULT_ROLE_POLICY, RolePolicy, list_permissions
from core.services.auth.service import AuthService
from core.services.auth.session import UserSessionContext, UserSessionPrincipal

__all__ = [
    "AuthService",
    "DEFAULT_ROLE_POLICY",
    "PermissionEvaluator",
    "RolePolicy",
    "UserSessionPrincipal",
    "UserSessionContext",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "is_admin_session",
    "list_permissions",
    "permissions_for",
    "require_all_permissions",
    "require_any_permission",
    "require_permission",
    "status_code_for",
]
