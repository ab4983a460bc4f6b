# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/async_job_registry.py

Registry global para mantener referencias de asyncio.Task activos
(efectos secundarios "fire-and-forget", p. ej. el aviso de boas-vindas).
Sin referencia fuerte el loop puede recolectar la task antes de terminar;
además permite cancelación ordenada durante shutdown.

Autor: Equipo Revenda
Fecha: 2026-03-02
"""

import asyncio
import logging
import threading
from typing import Awaitable, Dict, Optional

logger = logging.getLogger(__name__)


class AsyncJobRegistry:
    """Registry thread-safe de asyncio.Task activos por job_id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._active_tasks: Dict[str, asyncio.Task] = {}

    def register_task(self, job_id: str, task: asyncio.Task) -> None:
        """Registra una task activa y la desregistra al terminar."""
        with self._lock:
            self._active_tasks[job_id] = task
        task.add_done_callback(lambda _t: self.unregister_task(job_id))
        logger.debug("task_registered job_id=%s", job_id)

    def unregister_task(self, job_id: str) -> None:
        with self._lock:
            self._active_tasks.pop(job_id, None)

    def get_task(self, job_id: str) -> Optional[asyncio.Task]:
        with self._lock:
            return self._active_tasks.get(job_id)

    def spawn(self, job_id: str, coro: Awaitable) -> asyncio.Task:
        """Crea la task sin esperarla y la registra."""
        task = asyncio.ensure_future(coro)
        self.register_task(job_id, task)
        return task

    def get_active_count(self) -> int:
        with self._lock:
            return len([t for t in self._active_tasks.values() if not t.done()])

    async def cancel_all_tasks(self, timeout: float = 30.0) -> None:
        """
        Cancela todas las tasks activas y espera a que terminen.

        Args:
            timeout: Tiempo máximo de espera en segundos
        """
        with self._lock:
            active_tasks = [t for t in self._active_tasks.values() if not t.done()]

        if not active_tasks:
            logger.info("🟢 No hay tasks activas para cancelar")
            return

        logger.info("🔄 Cancelando %d tasks activas...", len(active_tasks))
        for task in active_tasks:
            task.cancel()

        try:
            await asyncio.wait_for(
                asyncio.gather(*active_tasks, return_exceptions=True),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("⚠️ Timeout esperando cancelación de tasks (%ss)", timeout)

        with self._lock:
            self._active_tasks.clear()


# Instancia global
job_registry = AsyncJobRegistry()
