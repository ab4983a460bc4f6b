# -*- coding: utf-8 -*-
"""
backend/app/modules/accounts/repositories/__init__.py

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from .user_repository import UserRepository
from .account_repository import AccountRepository
from .plan_repository import PlanRepository
from .subscription_repository import SubscriptionRepository

__all__ = [
    "UserRepository",
    "AccountRepository",
    "PlanRepository",
    "SubscriptionRepository",
]
