from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from core.services.auth import UserSessionContext

if TYPE_CHECKING:
    from PySide6.QtWidgets import QWidget


def has_permission(user_session: UserSessionContext | None, permission: Any) -> bool:
    if user_session is None:
        return False
    return user_session.has_permission(permission)


def has_any_permission(user_session: UserSessionContext | None, permissions: Iterable[Any]) -> bool:
    if user_session is None:
        return False
    return user_session.has_any_permission(permissions)


def has_all_permissions(user_session: UserSessionContext | None, permissions: Iterable[Any]) -> bool:
    if user_session is None:
        return False
    return user_session.has_all_permissions(permissions)


def apply_permission_hint(widget: QWidget, *, allowed: bool, missing_permission: Any) -> None:
    """Disable ``widget`` and explain why when the action is not allowed."""
    if allowed:
        return
    widget.setEnabled(False)
    current_hint = widget.toolTip().strip()
    if current_hint:
        return
    code = getattr(missing_permission, "value", missing_permission)
    widget.setToolTip(f"Requires '{code}' permission.")


def apply_permission_visibility(
    widget: QWidget,
    *,
    allowed: bool,
    fallback: QWidget | None = None,
) -> None:
    """Show ``widget`` only when allowed; ``fallback`` takes its place otherwise."""
    widget.setVisible(allowed)
    if fallback is not None:
        fallback.setVisible(not allowed)


__all__ = [
    "apply_permission_hint",
    "apply_permission_visibility",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
]
