from __future__ import annotations

import re
from typing import Any

from core.exceptions import ValidationError
from core.models import Role
from core.services.auth.policy import parse_role


_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_NAME_MIN = 2
_NAME_MAX = 50


class AuthValidationMixin:
    @staticmethod
    def _validate_password(password: str) -> None:
        pwd = password or ""
        if len(pwd) < 8:
            raise ValidationError(
                "Password must be at least 8 characters.",
                code="WEAK_PASSWORD",
            )
        if not any(ch.isupper() for ch in pwd):
            raise ValidationError(
                "Password must contain at least one uppercase letter.",
                code="WEAK_PASSWORD",
            )
        if not any(ch.islower() for ch in pwd):
            raise ValidationError(
                "Password must contain at least one lowercase letter.",
                code="WEAK_PASSWORD",
            )
        if not any(ch.isdigit() for ch in pwd):
            raise ValidationError(
                "Password must contain at least one number.",
                code="WEAK_PASSWORD",
            )

    @staticmethod
    def _validate_email(email: str | None) -> None:
        if not email:
            raise ValidationError("Email is required.", code="EMAIL_REQUIRED")
        if not _EMAIL_RE.match(email):
            raise ValidationError(
                "Please enter a valid email address.",
                code="INVALID_EMAIL",
            )

    @staticmethod
    def _clean_name(value: str | None, *, label: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValidationError(f"{label} is required.", code="INVALID_NAME")
        if len(cleaned) < _NAME_MIN:
            raise ValidationError(
                f"{label} must be at least {_NAME_MIN} characters.",
                code="INVALID_NAME",
            )
        if len(cleaned) > _NAME_MAX:
            raise ValidationError(
                f"{label} must be less than {_NAME_MAX} characters.",
                code="INVALID_NAME",
            )
        return cleaned

    @staticmethod
    def _require_role(value: Any) -> Role:
        role = parse_role(value)
        if role is None:
            raise ValidationError("Please select a valid role.", code="INVALID_ROLE")
        return role
