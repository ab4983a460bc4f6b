# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de Revenda.

Ajustes clave:
- Uso de app.core.settings como fachada de configuración.
- Logging configurado desde settings (LOG_LEVEL / LOG_FORMAT) en el lifespan.
- Shutdown ordenado: cancela los avisos de boas-vindas pendientes.
- Respuestas JSON con charset UTF-8 (mensajes en portugués con acentos).
- Health principal /health delegado al paquete app.routes (health_routes.py)

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de instanciar settings
# Fuera de producción el .env manda sobre variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
import uvicorn
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging
from app.shared.middleware import JSONExceptionMiddleware
from app.shared.utils.async_job_registry import job_registry
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)
    logger.info("backend_started env=%s", settings.python_env)

    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            pending = job_registry.get_active_count()
            if pending:
                logger.info("cancelling_background_jobs count=%s", pending)
            await job_registry.cancel_all_tasks(timeout=10.0)
        logger.info("backend_stopped")


openapi_tags = [
    {"name": "webhooks:receive", "description": "Recepción pública de webhooks de plataformas"},
    {"name": "admin:webhooks", "description": "Configuración, historial y reprocesamiento"},
]

app = FastAPI(
    title="Revenda API",
    description="Ingesta de webhooks de plataformas de cobro y alta de cuentas",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    default_response_class=UTF8JSONResponse,
)


def _configure_cors(app_instance: FastAPI) -> None:
    origins = get_settings().get_cors_origins()
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


app.add_middleware(JSONExceptionMiddleware)
_configure_cors(app)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler de HTTPException con charset UTF-8.

    Evita mojibake en mensajes de error (acentos).
    """
    return json_response_utf8(
        content={"success": False, "error": {"message": exc.detail}},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": "Revenda Backend", "status": "active"}


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
    )

# Fin del archivo backend/app/main.py
