# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Clientes de integración con servicios externos (correo).
"""

from .email_sender import IEmailSender, StubEmailSender, EmailSender, get_email_sender

__all__ = [
    "IEmailSender",
    "StubEmailSender",
    "EmailSender",
    "get_email_sender",
]
