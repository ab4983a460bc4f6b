# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Configuración base de Revenda (Pydantic v2 + pydantic-settings).
Las subclases por entorno (dev/test/prod) sólo ajustan valores puntuales.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

EnvName = Literal["development", "test", "production"]

DEFAULT_REPROCESS_SECRET = "reprocess-internal"


class BaseAppSettings(BaseSettings):
    # =========================
    # Aplicación
    # =========================
    app_name: str = Field(default="Revenda API", validation_alias="APP_NAME")
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="revenda", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")  # prefer|require|disable
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """
        URL async para SQLAlchemy.
        Prioriza DB_URL (normalizando el esquema postgres a asyncpg); si no,
        la construye desde los componentes individuales.
        """
        from urllib.parse import quote_plus

        if self.db_url:
            url = self.db_url
            if url.startswith("postgres://") or url.startswith("postgresql://"):
                url = (
                    url.replace("postgres://", "postgresql+asyncpg://", 1)
                       .replace("postgresql://", "postgresql+asyncpg://", 1)
                )
            return url

        pw = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+asyncpg://{self.db_user}:{pw}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Webhooks de entrada
    # =========================
    webhook_reprocess_secret: SecretStr = Field(
        default=SecretStr(DEFAULT_REPROCESS_SECRET),
        validation_alias="WEBHOOK_REPROCESS_SECRET",
    )
    webhook_reprocess_header: str = Field(
        default="x-internal-reprocess",
        validation_alias="WEBHOOK_REPROCESS_HEADER",
    )
    webhook_test_log_limit: int = Field(default=2, ge=1, validation_alias="WEBHOOK_TEST_LOG_LIMIT")
    webhook_default_password: SecretStr = Field(
        default=SecretStr("ChangeMe123!"),
        validation_alias="WEBHOOK_DEFAULT_PASSWORD",
    )
    webhook_public_base_url: Optional[str] = Field(default=None, validation_alias="WEBHOOK_PUBLIC_BASE_URL")

    # =========================
    # Email (notificación de bienvenida)
    # =========================
    email_mode: Literal["console", "api"] = Field(default="console", validation_alias="EMAIL_MODE")
    email_timeout_sec: int = Field(default=30, validation_alias="EMAIL_TIMEOUT_SEC")
    frontend_url: str = Field(default="http://localhost:5173", validation_alias="FRONTEND_URL")

    # MailerSend API (solo aplica si email_mode == "api")
    mailersend_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MAILERSEND_API_KEY")
    mailersend_from_email: Optional[str] = Field(default=None, validation_alias="MAILERSEND_FROM_EMAIL")
    mailersend_from_name: str = Field(default="Revenda", validation_alias="MAILERSEND_FROM_NAME")

    # =========================
    # Internal Service Auth (superficie admin)
    # =========================
    internal_service_token: Optional[SecretStr] = Field(default=None, validation_alias="APP_SERVICE_TOKEN")

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")
    trust_proxy_headers: bool = Field(default=False, validation_alias="TRUST_PROXY_HEADERS")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    # ===== Utilidad para normalizar CORS =====
    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de seguridad y coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        secret = self.webhook_reprocess_secret.get_secret_value()

        if self.is_prod:
            if secret == DEFAULT_REPROCESS_SECRET or len(secret) < 16:
                raise ValueError(
                    "WEBHOOK_REPROCESS_SECRET debe definirse (≥16 caracteres) en producción"
                )
            if self.db_sslmode != "require" and not self.db_url:
                raise ValueError("DB_SSLMODE debe ser 'require' en producción")
            if not self.internal_service_token:
                raise ValueError("APP_SERVICE_TOKEN es requerido en producción")

        if self.email_mode == "api":
            if not self.mailersend_api_key or not self.mailersend_from_email:
                raise ValueError("EMAIL_MODE=api requiere MAILERSEND_API_KEY y MAILERSEND_FROM_EMAIL.")

        if self.is_dev and secret == DEFAULT_REPROCESS_SECRET:
            logger.info(
                "ℹ️ WEBHOOK_REPROCESS_SECRET usa el valor por defecto - definir uno propio fuera de desarrollo"
            )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "DEFAULT_REPROCESS_SECRET"]
# Fin del archivo backend/app/shared/config/settings_base.py
