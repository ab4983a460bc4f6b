# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/__init__.py

Módulo de cuentas de Revenda.

Gestiona el grafo usuario → cuenta → suscripción y el catálogo de planes.
Las mutaciones desde webhooks pasan exclusivamente por la máquina de
estados de `app.modules.webhooks.facades.account_state_machine`.

Estructura:
- models: User, Account, Plan, Subscription
- repositories: consultas con soft-delete (deleted_at)

Autor: Equipo Revenda
Fecha: 2026-03-02
"""
