from __future__ import annotations

import pytest

from core.exceptions import ValidationError
from core.models import Role, normalize_email
from core.services.auth.validation import AuthValidationMixin


class _Validator(AuthValidationMixin):
    pass


def test_email_is_normalized_and_validated():
    validator = _Validator()
    assert normalize_email("  USER.Name@Example.COM  ") == "user.name@example.com"
    assert normalize_email("   ") is None

    validator._validate_email("user.name@example.com")
    with pytest.raises(ValidationError, match="valid email"):
        validator._validate_email("not-an-email")
    with pytest.raises(ValidationError) as exc:
        validator._validate_email(None)
    assert exc.value.code == "EMAIL_REQUIRED"


def test_password_rules_match_user_form():
    validator = _Validator()
    validator._validate_password("StrongPass123")
    with pytest.raises(ValidationError, match="at least 8"):
        validator._validate_password("Short1A")
    with pytest.raises(ValidationError, match="uppercase"):
        validator._validate_password("alllowercase123")
    with pytest.raises(ValidationError, match="lowercase"):
        validator._validate_password("ALLUPPERCASE123")
    with pytest.raises(ValidationError, match="number"):
        validator._validate_password("NoDigitsHere")


def test_names_are_trimmed_and_bounded():
    validator = _Validator()
    assert validator._clean_name("  Ana ", label="First name") == "Ana"
    for blank in ("", "   ", None):
        with pytest.raises(ValidationError, match="First name is required") as exc:
            validator._clean_name(blank, label="First name")
        assert exc.value.code == "INVALID_NAME"
    with pytest.raises(ValidationError, match="First name must be at least 2"):
        validator._clean_name("A", label="First name")
    with pytest.raises(ValidationError, match="Last name must be less than 50"):
        validator._clean_name("x" * 51, label="Last name")


def test_role_must_be_known_at_the_form_boundary():
    validator = _Validator()
    assert validator._require_role("member") is Role.MEMBER
    assert validator._require_role(Role.ADMIN) is Role.ADMIN
    with pytest.raises(ValidationError, match="valid role"):
        validator._require_role("contractor")


def test_register_user_requires_both_names(services, admin_session):
    auth = services["auth_service"]

    with pytest.raises(ValidationError) as exc:
        auth.register_user("nameless@example.com", "StrongPass123", None, None)
    assert exc.value.code == "INVALID_NAME"

    with pytest.raises(ValidationError, match="Last name is required"):
        auth.register_user("nameless@example.com", "StrongPass123", "Nia", "  ")

    assert "nameless@example.com" not in {u.email for u in auth.list_users()}


def test_profile_update_cannot_blank_out_a_name(services, admin_session):
    auth = services["auth_service"]
    user = auth.register_user("named@example.com", "StrongPass123", "Nia", "Lopez")

    with pytest.raises(ValidationError) as exc:
        auth.update_user_profile(user.id, first_name="")
    assert exc.value.code == "INVALID_NAME"

    stored = next(u for u in auth.list_users() if u.id == user.id)
    assert stored.first_name == "Nia"
