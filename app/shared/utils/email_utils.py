
# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/email_utils.py

Validación y normalización básica de direcciones de correo.
Usa la librería oficial `email-validator` (Pydantic v2 la usa internamente).

Funciones:
- is_valid_email_address(email: str) -> bool
- normalize_email(email: str) -> str
- mask_email(email: str) -> str   (para logs)

Autor: Equipo Revenda
Actualizado: 2026-03-02
"""

from typing import Optional
from email_validator import validate_email, EmailNotValidError


def is_valid_email_address(email: Optional[str]) -> bool:
    """Devuelve True si el email cumple formato RFC (sin comprobar DNS)."""
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def normalize_email(email: Optional[str]) -> str:
    """
    Normaliza: strip + lowercase del local@domain.
    No valida – combínalo con is_valid_email_address si es necesario.
    """
    return (email or "").strip().lower()


def mask_email(email: Optional[str]) -> str:
    """
    Ofusca email para logging seguro.
    Ejemplo: usuario@example.com -> usu***@example.com
    """
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:3]}***@{domain}"
# --- Fin del archivo ---
