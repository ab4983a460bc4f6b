# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/exceptions.py

Errores de dominio de la recepción de webhooks.

Cada error lleva el status HTTP y el mensaje público con el que se
responde. El manejador de recepción los convierte en
{"success": false, "error": {"message": ...}} y registra la entrega.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations


class WebhookProcessingError(Exception):
    """Base de errores terminales de una entrega (no se reintentan solos)."""

    status_code: int = 400
    public_message: str = "Erro ao processar webhook"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.public_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class WebhookNotFoundError(WebhookProcessingError):
    status_code = 404
    public_message = "Webhook não encontrado"


class WebhookInactiveError(WebhookProcessingError):
    status_code = 400
    public_message = "Webhook não está ativo"


class WebhookWithoutMappingsError(WebhookProcessingError):
    status_code = 400
    public_message = "Webhook ativo sem campos mapeados"


class MissingEmailError(WebhookProcessingError):
    status_code = 400
    public_message = "Campo Email não mapeado ou vazio"


class ConcurrentDeliveryConflictError(WebhookProcessingError):
    """
    Dos entregas simultáneas intentaron crear el mismo email.
    Se responde 500 genérico para que la plataforma reintente; el
    reintento encuentra al usuario y termina en "updated".
    """

    status_code = 500
    public_message = "Erro ao processar webhook"


__all__ = [
    "WebhookProcessingError",
    "WebhookNotFoundError",
    "WebhookInactiveError",
    "WebhookWithoutMappingsError",
    "MissingEmailError",
    "ConcurrentDeliveryConflictError",
]
# Fin del archivo backend/app/modules/webhooks/exceptions.py
