# -*- coding: utf-8 -*-
"""
backend/app/modules/webhooks/__init__.py

Módulo de webhooks de entrada de Revenda.

Recibe payloads JSON arbitrarios de plataformas de cobro/venta, los
traduce a campos canónicos con reglas de mapeo configuradas por el
administrador y crea, restaura o actualiza el grafo usuario → cuenta →
suscripción. Cada entrega queda registrada (saneada) en webhook_logs.

Estructura:
- enums: WebhookOutcome, RecurrencePeriod
- models: Webhook, WebhookFieldMapping, WebhookLog
- repositories: configuración y bitácora de entregas
- services: extractor de rutas, parser de recurrencia, mapeador de campos,
  resolución de planes, bitácora de entregas, resumen legible
- facades: manejador de recepción y máquina de estados de cuentas
- routes: POST /webhooks/receive/{webhook_id} y superficie admin

Autor: Equipo Revenda
Fecha: 2026-03-02
"""
