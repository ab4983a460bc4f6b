# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/repositories/account_repository.py

Repositorio para la tabla accounts.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from app.shared.database.repository import BaseRepository
from app.modules.accounts.models import Account


class AccountRepository(BaseRepository[Account]):
    def __init__(self) -> None:
        super().__init__(Account)

# Fin del archivo backend/app/modules/accounts/repositories/account_repository.py
