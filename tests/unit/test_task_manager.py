"""
Unit Tests for TaskManager
"""

import asyncio

import pytest

from orchestrator.task_manager import TaskManager

async def test_run_task_records_result():
    manager = TaskManager()

    async def work():
        return 42

    task = await manager.create_task(work(), task_id="answer")
    result = await manager.run_task(task)

    assert result == 42
    assert task.status == 'completed'
    assert manager.get_task("answer") is task
    assert manager.get_active_tasks() == []

async def test_run_task_reraises_failures():
    manager = TaskManager()

    async def broken():
        raise RuntimeError("boom")

    task = await manager.create_task(broken())
    with pytest.raises(RuntimeError):
        await manager.run_task(task)

    assert task.status == 'failed'
    assert task.error == "boom"

async def test_spawn_runs_in_background_and_records_failure():
    manager = TaskManager()
    finished = asyncio.Event()

    async def delayed():
        await asyncio.sleep(0)
        finished.set()

    async def broken():
        raise ValueError("bad")

    ok = await manager.spawn(delayed(), task_id="ok")
    bad = await manager.spawn(broken(), task_id="bad")
    await manager.wait_for_background()

    assert finished.is_set()
    assert ok.status == 'completed'
    assert bad.status == 'failed'

async def test_finished_background_tasks_are_forgotten():
    manager = TaskManager()

    async def work():
        return None

    for index in range(5):
        await manager.spawn(work(), task_id=f"redirect-{index}")
    await manager.wait_for_background()

    assert manager.tasks == {}
    assert manager.get_active_tasks() == []
