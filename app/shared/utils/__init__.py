# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Exportación de utilidades comunes.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .email_utils import is_valid_email_address, normalize_email, mask_email
from .json_response import UTF8JSONResponse, json_response_utf8
from .security import hash_password, verify_password

__all__ = [
    "is_valid_email_address",
    "normalize_email",
    "mask_email",
    "UTF8JSONResponse",
    "json_response_utf8",
    "hash_password",
    "verify_password",
]
