from __future__ import annotations

import base64
import hashlib
import hmac
import os


_ALGORITHM = "sha256"
_SCHEME = f"pbkdf2_{_ALGORITHM}"
_FALLBACK_ITERATIONS = 390_000
_SALT_BYTES = 16


def default_iterations() -> int:
    raw = (os.getenv("PM_PASSWORD_ITERATIONS", "") or "").strip()
    try:
        value = int(raw)
    except ValueError:
        return _FALLBACK_ITERATIONS
    return value if value > 0 else _FALLBACK_ITERATIONS


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _derive(raw_password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(_ALGORITHM, raw_password.encode("utf-8"), salt, iterations)


def hash_password(raw_password: str, *, iterations: int | None = None) -> str:
    rounds = iterations or default_iterations()
    salt = os.urandom(_SALT_BYTES)
    return f"{_SCHEME}${rounds}${_b64(salt)}${_b64(_derive(raw_password, salt, rounds))}"


def _split(encoded_hash: str) -> tuple[int, bytes, bytes] | None:
    try:
        scheme, iter_s, salt_b64, digest_b64 = (encoded_hash or "").split("$", 3)
        if scheme != _SCHEME:
            return None
        return (
            int(iter_s),
            base64.b64decode(salt_b64.encode("ascii")),
            base64.b64decode(digest_b64.encode("ascii")),
        )
    except (ValueError, TypeError):
        return None


def verify_password(raw_password: str, encoded_hash: str) -> bool:
    parts = _split(encoded_hash)
    if parts is None:
        return False
    iterations, salt, expected = parts
    return hmac.compare_digest(_derive(raw_password or "", salt, iterations), expected)


def needs_rehash(encoded_hash: str) -> bool:
    parts = _split(encoded_hash)
    if parts is None:
        return True
    return parts[0] < default_iterations()


__all__ = ["hash_password", "verify_password", "needs_rehash", "default_iterations"]
