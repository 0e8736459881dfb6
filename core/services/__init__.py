from .auth import AuthService, PermissionEvaluator, RolePolicy, UserSessionContext

__all__ = [
    "AuthService",
    "PermissionEvaluator",
    "RolePolicy",
    "UserSessionContext",
]
