# -*- coding: utf-8 -*-
"""
backend/tests/shared/utils/test_email_utils.py
"""

import pytest

from app.shared.utils.email_utils import is_valid_email_address, mask_email, normalize_email


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Ana@Example.COM ", "ana@example.com"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_email(raw, expected):
    assert normalize_email(raw) == expected


def test_is_valid_email_address():
    assert is_valid_email_address("ana@example.com") is True
    assert is_valid_email_address("ana@") is False
    assert is_valid_email_address("") is False
    assert is_valid_email_address(None) is False


def test_mask_email():
    assert mask_email("usuario@example.com") == "usu***@example.com"
    assert mask_email("invalid") == "***"
    assert mask_email(None) == "***"
