from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from core.interfaces import UserRepository
from core.models import Permission, Role, UserAccount, normalize_email
from core.services.auth.authorization import require_permission
from core.services.auth.evaluator import PermissionEvaluator
from core.services.auth.passwords import hash_password, needs_rehash, verify_password
from core.services.auth.query import AuthQueryMixin
from core.services.auth.session import UserSessionContext, UserSessionPrincipal
from core.services.auth.validation import AuthValidationMixin

logger = logging.getLogger(__name__)


class AuthService(AuthQueryMixin, AuthValidationMixin):
    def __init__(
        self,
        session: Session,
        user_repo: UserRepository,
        evaluator: PermissionEvaluator | None = None,
        user_session: UserSessionContext | None = None,
    ):
        self._session: Session = session
        self._user_repo: UserRepository = user_repo
        self._evaluator: PermissionEvaluator = evaluator or PermissionEvaluator()
        self._user_session: UserSessionContext | None = user_session

    def bootstrap_defaults(self) -> UserAccount:
        admin_email = normalize_email(os.getenv("PM_ADMIN_EMAIL", "admin@admin.com")) or "admin@admin.com"
        admin_password = os.getenv("PM_ADMIN_PASSWORD", "ChangeMe123!")
        admin = self._user_repo.get_by_email(admin_email)
        if admin is None:
            admin = self.register_user(
                email=admin_email,
                raw_password=admin_password,
                first_name="Admin",
                last_name="User",
                role=Role.ADMIN,
                commit=False,
                bypass_permission=True,
            )
            logger.info("Seeded administrator account %s", admin_email)
        elif admin.role is not Role.ADMIN or not admin.is_active:
            if admin.role is not Role.ADMIN:
                logger.warning("Restored ADMIN role on bootstrap account %s", admin_email)
            if not admin.is_active:
                logger.warning("Reactivated bootstrap account %s", admin_email)
            admin.role = Role.ADMIN
            admin.is_active = True
            admin.updated_at = datetime.now(timezone.utc)
            self._save(admin)

        self._session.commit()
        return admin

    def register_user(
        self,
        email: str,
        raw_password: str,
        first_name: str,
        last_name: str,
        role: Role | str = Role.MEMBER,
        is_active: bool = True,
        *,
        commit: bool = True,
        bypass_permission: bool = False,
    ) -> UserAccount:
        if not bypass_permission:
            require_permission(self._user_session, Permission.USER_CREATE, operation_label="register user")
        normalized_email = normalize_email(email)
        self._validate_email(normalized_email)
        first = self._clean_name(first_name, label="First name")
        last = self._clean_name(last_name, label="Last name")
        parsed_role = self._require_role(role)
        self._validate_password(raw_password)
        if self._user_repo.get_by_email(normalized_email):
            raise ValidationError("Email already exists.", code="EMAIL_EXISTS")

        user = UserAccount.create(
            email=normalized_email,
            password_hash=hash_password(raw_password),
            first_name=first,
            last_name=last,
            role=parsed_role,
            is_active=is_active,
        )
        try:
            with self._session.begin_nested():
                self._user_repo.add(user)
            if commit:
                self._session.commit()
        except IntegrityError as exc:
            self._session.rollback()
            if "email" in str(exc).lower():
                raise ValidationError("Email already exists.", code="EMAIL_EXISTS") from exc
            raise ValidationError(
                "Failed to create user due to data conflict.",
                code="USER_CREATE_CONFLICT",
            ) from exc
        except Exception:
            self._session.rollback()
            raise
        return user

    def authenticate(self, email: str, raw_password: str) -> UserAccount:
        normalized = normalize_email(email) or ""
        user = self._user_repo.get_by_email(normalized)
        if not user or not user.is_active or not verify_password(raw_password, user.password_hash):
            logger.warning("Failed login attempt for %s", normalized or "<empty>")
            raise AuthenticationError("Invalid credentials.", code="AUTH_FAILED")
        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(raw_password)
            user.updated_at = datetime.now(timezone.utc)
            self._save(user)
        logger.info("User %s signed in", user.email)
        return user

    def build_principal(self, user: UserAccount) -> UserSessionPrincipal:
        return UserSessionPrincipal(
            user_id=user.id,
            email=user.email,
            display_name=user.display_name,
            role=user.role,
            permissions=self._evaluator.permissions_for(user.role) if user.is_active else frozenset(),
        )

    def login(self, email: str, raw_password: str) -> UserSessionPrincipal:
        principal = self.build_principal(self.authenticate(email, raw_password))
        if self._user_session is not None:
            self._user_session.set_principal(principal)
        return principal

    def logout(self) -> None:
        if self._user_session is not None:
            self._user_session.clear()

    def resolve_actor(self, user_id: str | None) -> UserSessionPrincipal:
        user = self._user_repo.get(user_id) if user_id else None
        if user is None or not user.is_active:
            raise AuthenticationError("Unauthorized")
        return self.build_principal(user)

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        principal = self._user_session.principal if self._user_session else None
        if principal is None:
            raise AuthenticationError("Authentication required for change password.")
        if principal.user_id != user_id:
            raise PermissionDeniedError("Users can only change their own password.")
        user = self._require_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect.", code="AUTH_FAILED")

        self._validate_password(new_password)
        user.password_hash = hash_password(new_password)
        user.updated_at = datetime.now(timezone.utc)
        self._save(user)

    def reset_user_password(self, user_id: str, new_password: str) -> None:
        require_permission(self._user_session, Permission.USER_EDIT, operation_label="reset user password")
        user = self._require_user(user_id)
        self._validate_password(new_password)
        user.password_hash = hash_password(new_password)
        user.updated_at = datetime.now(timezone.utc)
        self._save(user)

    def assign_role(self, user_id: str, role: Role | str) -> UserAccount:
        require_permission(self._user_session, Permission.USER_EDIT, operation_label="assign role")
        parsed_role = self._require_role(role)
        user = self._require_user(user_id)
        if user.role is parsed_role:
            return user
        if parsed_role is not Role.ADMIN:
            self._ensure_other_admin(user)
        user.role = parsed_role
        user.updated_at = datetime.now(timezone.utc)
        self._save(user)
        logger.info("Assigned role %s to user %s", parsed_role.value, user.id)
        self._refresh_principal(user)
        return user

    def list_users(self) -> List[UserAccount]:
        require_permission(self._user_session, Permission.USER_VIEW, operation_label="list users")
        return self._user_repo.list_all()

    def set_user_active(self, user_id: str, is_active: bool) -> UserAccount:
        require_permission(self._user_session, Permission.USER_EDIT, operation_label="set user active")
        user = self._require_user(user_id)
        if not is_active:
            self._ensure_other_admin(user)
        user.is_active = bool(is_active)
        user.updated_at = datetime.now(timezone.utc)
        self._save(user)
        self._refresh_principal(user)
        return user

    def update_user_profile(
        self,
        user_id: str,
        *,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        expected_version: int | None = None,
    ) -> UserAccount:
        require_permission(self._user_session, Permission.USER_EDIT, operation_label="update user profile")
        user = self._require_user(user_id)
        if expected_version is not None:
            user.version = expected_version

        if email is not None:
            normalized_email = normalize_email(email)
            self._validate_email(normalized_email)
            existing = self._user_repo.get_by_email(normalized_email)
            if existing and existing.id != user.id:
                raise ValidationError("Email already exists.", code="EMAIL_EXISTS")
            user.email = normalized_email

        if first_name is not None:
            user.first_name = self._clean_name(first_name, label="First name")

        if last_name is not None:
            user.last_name = self._clean_name(last_name, label="Last name")

        user.updated_at = datetime.now(timezone.utc)
        try:
            self._save(user)
        except IntegrityError as exc:
            raise ValidationError(
                "Failed to update user due to data conflict.",
                code="USER_UPDATE_CONFLICT",
            ) from exc
        self._refresh_principal(user)
        return user

    def delete_user(self, user_id: str) -> None:
        require_permission(self._user_session, Permission.USER_DELETE, operation_label="delete user")
        user = self._require_user(user_id)
        principal = self._user_session.principal if self._user_session else None
        if principal is not None and principal.user_id == user.id:
            raise ValidationError("You cannot delete your own account.", code="SELF_DELETE")
        self._ensure_other_admin(user)
        try:
            self._user_repo.delete(user.id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted user %s", user.id)

    def _save(self, user: UserAccount) -> None:
        try:
            self._user_repo.update(user)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def _ensure_other_admin(self, user: UserAccount) -> None:
        if user.role is not Role.ADMIN or not user.is_active:
            return
        remaining = [
            other
            for other in self._user_repo.list_all()
            if other.id != user.id and other.role is Role.ADMIN and other.is_active
        ]
        if not remaining:
            raise ValidationError(
                "At least one active administrator is required.",
                code="LAST_ADMIN",
            )

    def _refresh_principal(self, user: UserAccount) -> None:
        # Sessions hold a permission snapshot; keep it in step with the acting user's record.
        if self._user_session is None:
            return
        principal = self._user_session.principal
        if principal is None or principal.user_id != user.id:
            return
        if user.is_active:
            self._user_session.set_principal(self.build_principal(user))
        else:
            logger.info("Session closed for deactivated user %s", user.id)
            self._user_session.clear()


__all__ = ["AuthService"]
