from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.interfaces import UserRepository
from core.models import UserAccount
from infra.db.auth.mapper import user_from_orm, user_to_orm
from infra.db.models import UserORM
from infra.db.optimistic import update_with_version_check


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, user: UserAccount) -> None:
        self.session.add(user_to_orm(user))

    def update(self, user: UserAccount) -> None:
        user.version = update_with_version_check(
            self.session,
            UserORM,
            user.id,
            getattr(user, "version", 1),
            {
                "email": user.email,
                "password_hash": user.password_hash,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "role": user.role.value if user.role else None,
                "is_active": user.is_active,
                "updated_at": user.updated_at,
            },
            not_found_message="User not found.",
            stale_message="User account was updated by another user.",
        )

    def delete(self, user_id: str) -> None:
        self.session.execute(delete(UserORM).where(UserORM.id == user_id))

    def get(self, user_id: str) -> Optional[UserAccount]:
        obj = self.session.get(UserORM, user_id)
        return user_from_orm(obj) if obj else None

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        stmt = select(UserORM).where(UserORM.email == email)
        obj = self.session.execute(stmt).scalars().first()
        return user_from_orm(obj) if obj else None

    def list_all(self) -> List[UserAccount]:
        rows = self.session.execute(select(UserORM).order_by(UserORM.created_at.desc())).scalars().all()
        return [user_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyUserRepository"]
