"""Password hashing and random token helpers."""

from __future__ import annotations

import secrets

from flask import current_app, has_app_context
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "scrypt"
TOKEN_BYTES = 40


def generate_token() -> str:
    """Return a random hex token carrying 320 bits of entropy."""

    return secrets.token_hex(TOKEN_BYTES)


def hash_password(password: str) -> str:
    """Hash a password with the configured adaptive method and a random salt."""

    method = DEFAULT_HASH_METHOD
    if has_app_context():
        method = current_app.config.get("PASSWORD_HASH_METHOD") or DEFAULT_HASH_METHOD
    return generate_password_hash(password, method=method)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored hash."""

    if not password_hash:
        return False
    return check_password_hash(password_hash, password)
