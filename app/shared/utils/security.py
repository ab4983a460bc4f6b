# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/security.py

Hasheo y verificación de contraseñas (Argon2id via passlib).

Los usuarios creados por webhook reciben una contraseña fija de un solo
uso (WEBHOOK_DEFAULT_PASSWORD); se guarda siempre hasheada.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Límite máximo para prevenir DoS con payloads gigantes
MAX_PASSWORD_LENGTH = 1024

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__type="ID",
    argon2__memory_cost=65536,  # 64 MB
    argon2__time_cost=3,
    argon2__parallelism=2,
)


class PasswordTooLongError(ValueError):
    """Contraseña excede el límite máximo permitido."""
    pass


def hash_password(password: str) -> str:
    """
    Genera un hash seguro de la contraseña usando Argon2id.

    Raises:
        PasswordTooLongError: Si la contraseña excede MAX_PASSWORD_LENGTH
    """
    if len(password) > MAX_PASSWORD_LENGTH:
        raise PasswordTooLongError(
            f"La contraseña no puede exceder {MAX_PASSWORD_LENGTH} caracteres"
        )
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica una contraseña contra su hash; False si el hash es inválido."""
    if len(plain_password) > MAX_PASSWORD_LENGTH:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.warning("password_verify_invalid_hash error=%s", e)
        return False


__all__ = ["hash_password", "verify_password", "PasswordTooLongError"]
# Fin del archivo backend/app/shared/utils/security.py
