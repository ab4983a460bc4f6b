# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/__init__.py

Notificaciones "best-effort" disparadas por eventos de cuenta
(boas-vindas al crear usuario vía webhook).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""
