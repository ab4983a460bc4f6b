# -*- coding: utf-8 -*-
"""
backend/tests/shared/utils/test_security.py

Hash Argon2id de la contraseña provisoria de usuarios creados por webhook.
"""

import pytest

from app.shared.utils.security import PasswordTooLongError, hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("ChangeMe123!")
    assert hashed.startswith("$argon2id$")
    assert verify_password("ChangeMe123!", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_invalid_hash_is_false():
    assert verify_password("ChangeMe123!", "not-a-hash") is False


def test_too_long_password():
    with pytest.raises(PasswordTooLongError):
        hash_password("x" * 10_000)
