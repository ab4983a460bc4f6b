# -*- coding: utf-8 -*-
"""
backend/tests/shared/utils/test_async_job_registry.py

Registro de tasks en segundo plano y cancelación en shutdown.
"""

import asyncio

import pytest

from app.shared.utils.async_job_registry import AsyncJobRegistry


@pytest.mark.asyncio
async def test_spawn_registers_until_done():
    registry = AsyncJobRegistry()
    gate = asyncio.Event()

    async def job():
        await gate.wait()

    task = registry.spawn("job-1", job())
    assert registry.get_task("job-1") is task
    assert registry.get_active_count() == 1

    gate.set()
    await task
    await asyncio.sleep(0)

    assert registry.get_task("job-1") is None
    assert registry.get_active_count() == 0


@pytest.mark.asyncio
async def test_cancel_all_tasks():
    registry = AsyncJobRegistry()
    task = registry.spawn("slow", asyncio.sleep(60))

    await registry.cancel_all_tasks(timeout=1.0)

    assert task.cancelled()
    assert registry.get_active_count() == 0


@pytest.mark.asyncio
async def test_cancel_all_without_tasks_is_noop():
    await AsyncJobRegistry().cancel_all_tasks(timeout=0.1)
