from __future__ import annotations

from core.models import UserAccount
from core.services.auth.policy import parse_role
from infra.db.models import UserORM


def user_to_orm(user: UserAccount) -> UserORM:
    return UserORM(
        id=user.id,
        email=user.email,
        password_hash=user.password_hash,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.value if user.role else None,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
        version=getattr(user, "version", 1),
    )


def user_from_orm(obj: UserORM) -> UserAccount:
    return UserAccount(
        id=obj.id,
        email=obj.email,
        password_hash=obj.password_hash,
        first_name=obj.first_name,
        last_name=obj.last_name,
        role=parse_role(obj.role),
        is_active=obj.is_active,
        created_at=obj.created_at,
        updated_at=obj.updated_at,
        version=getattr(obj, "version", 1),
    )


__all__ = ["user_to_orm", "user_from_orm"]
