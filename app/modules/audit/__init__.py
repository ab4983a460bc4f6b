# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/__init__.py

Sumidero de auditoría: registro legible de acciones sobre entidades
(quién, qué, sobre cuál registro, desde qué IP).

Autor: Equipo Revenda
Fecha: 2026-03-02
"""
