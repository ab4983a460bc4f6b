# -*- coding: utf-8 -*-
import pytest

from app.shared.config.config_loader import get_settings


def _reset_loader_cache():
    get_settings.cache_clear()


def _prod_minimums(monkeypatch):
    monkeypatch.setenv("DB_SSLMODE", "require")
    monkeypatch.setenv("WEBHOOK_REPROCESS_SECRET", "R" * 32)
    monkeypatch.setenv("APP_SERVICE_TOKEN", "svc-token")


def test_loader_returns_dev_by_default(monkeypatch):
    monkeypatch.delenv("PYTHON_ENV", raising=False)
    _reset_loader_cache()
    s = get_settings()
    assert s.is_dev is True
    assert s.python_env == "development"


def test_loader_selects_test(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "test")
    _reset_loader_cache()
    s = get_settings()
    assert s.is_test is True
    assert s.python_env == "test"


def test_loader_selects_prod(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    _prod_minimums(monkeypatch)
    _reset_loader_cache()
    s = get_settings()
    assert s.is_prod is True
    assert s.python_env == "production"


def test_loader_caches_singleton(monkeypatch):
    # Con cache: misma instancia entre llamadas.
    _reset_loader_cache()
    a = get_settings()
    b = get_settings()
    assert a is b


def test_prod_rejects_default_reprocess_secret(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    _prod_minimums(monkeypatch)
    monkeypatch.delenv("WEBHOOK_REPROCESS_SECRET", raising=False)
    _reset_loader_cache()
    with pytest.raises(ValueError) as ei:
        get_settings()
    assert "WEBHOOK_REPROCESS_SECRET" in str(ei.value)


def test_prod_requires_service_token(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    _prod_minimums(monkeypatch)
    monkeypatch.delenv("APP_SERVICE_TOKEN", raising=False)
    _reset_loader_cache()
    with pytest.raises(ValueError) as ei:
        get_settings()
    assert "APP_SERVICE_TOKEN" in str(ei.value)
# Fin del archivo backend/tests/shared/config/test_config_loader.py
