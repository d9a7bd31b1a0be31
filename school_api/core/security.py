"""Security helpers (password hashing for user records)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
_PREFIX = "argon2$"


def hash_password(password: str) -> str:
    """Create a modern Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def is_password_hash(value: str | None) -> bool:
    return isinstance(value, str) and value.startswith(_PREFIX)


def verify_password(password: str, stored_hash: str | None) -> bool:
    if not is_password_hash(stored_hash):
        return False
    try:
        return _ph.verify(stored_hash[len(_PREFIX) :], password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False
