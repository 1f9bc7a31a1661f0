"""Tests for password hashing and token helpers."""

from __future__ import annotations

import string

from services.credentials import generate_token, hash_password, verify_password


def test_generate_token_is_long_hex_and_random():
    first = generate_token()
    second = generate_token()

    assert len(first) == 80
    assert set(first) <= set(string.hexdigits.lower())
    assert first != second


def test_hash_password_uses_configured_method_and_salt(app_context):
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first.startswith("pbkdf2:sha256:1000")
    assert "secret1" not in first
    assert first != second


def test_verify_password(app_context):
    stored = hash_password("secret1")

    assert verify_password("secret1", stored) is True
    assert verify_password("secret2", stored) is False
    assert verify_password("secret1", None) is False
    assert verify_password("secret1", "") is False


def test_hash_password_defaults_to_scrypt_outside_app():
    assert hash_password("secret1").startswith("scrypt")
