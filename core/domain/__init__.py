from core.domain.auth import UserAccount
from core.domain.enums import Permission, Role
from core.domain.identifiers import generate_id, normalize_email

__all__ = [
    "generate_id",
    "normalize_email",
    "Role",
    "Permission",
    "UserAccount",
]
