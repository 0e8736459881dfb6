from __future__ import annotations

from core.domain import Permission, Role, UserAccount, generate_id, normalize_email

__all__ = ["generate_id", "normalize_email", "Role", "Permission", "UserAccount"]
