"""User-specific hooks plugged into the generic collection service."""

from __future__ import annotations

from school_api.core.security import hash_password, is_password_hash
from school_api.domain.resources import USERS, ResourceDefinition

PASSWORD_FIELD = "pwd"


def hash_user_password(record: dict) -> dict:
    """Troca ``pwd`` pelo hash Argon2, preservando valores ja hasheados."""
    pwd = record.get(PASSWORD_FIELD)
    if not pwd or is_password_hash(pwd):
        return record
    return {**record, PASSWORD_FIELD: hash_password(str(pwd))}


def users_resource(hash_passwords: bool) -> ResourceDefinition:
    return USERS.with_prepare(hash_user_password if hash_passwords else None)
