from __future__ import annotations

from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def normalize_email(email: str | None) -> str | None:
    value = (email or "").strip().lower()
    return value or None


__all__ = ["generate_id", "normalize_email"]
