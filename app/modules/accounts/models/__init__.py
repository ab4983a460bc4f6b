# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/models/__init__.py

Modelos ORM del módulo Accounts. Se importan juntos para que SQLAlchemy
resuelva las relationships por nombre.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .user_models import User
from .account_models import Account
from .plan_models import Plan
from .subscription_models import Subscription

__all__ = ["User", "Account", "Plan", "Subscription"]
