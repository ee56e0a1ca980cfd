"""
Task Management Module (Async Version)

Tracks coroutines that outlive the call that started them, such as the
delayed switch to the tenant dashboard after a submission.

Started tasks are never cancelled by the portal: navigating away or signing
out does not abort them. Failures are recorded on the Task and logged rather
than raised into the event loop.
"""

import asyncio
from datetime import datetime
from typing import Any, Coroutine, Dict, List, Optional

from constants import TimingConstants, Messages
from storage.logs_manager import LogsManager

class Task:
    def __init__(self, coroutine: Coroutine, task_id: str = None):
        self.coroutine = coroutine
        self.task_id = task_id or datetime.now().isoformat()
        self.created_at = datetime.now()
        self.completed_at = None
        self.status = 'pending'
        self.result = None
        self.error = None
        self.future: Optional[asyncio.Future] = None

class TaskManager:
    def __init__(self, logs_manager: Optional[LogsManager] = None):
        self.logs_manager = logs_manager
        self.tasks: Dict[str, Task] = {}
        self.active_tasks = set()
        self.join_timeout = TimingConstants.TASK_JOIN_TIMEOUT / 1000

    async def create_task(self, coroutine: Coroutine, task_id: str = None) -> Task:
        """Create a new task."""
        task = Task(coroutine, task_id)
        self.tasks[task.task_id] = task
        if self.logs_manager:
            await self.logs_manager.debug(f"[TaskManager] {Messages.TASK_CREATED.format(task.task_id)}")
        return task

    async def run_task(self, task: Task) -> Any:
        """Run a task to completion, recording its outcome."""
        try:
            self.active_tasks.add(task.task_id)
            task.status = 'running'

            result = await task.coroutine

            task.status = 'completed'
            task.completed_at = datetime.now()
            task.result = result
            if self.logs_manager:
                await self.logs_manager.debug(f"[TaskManager] {Messages.TASK_COMPLETED.format(task.task_id)}")
            return result

        except Exception as e:
            task.status = 'failed'
            task.completed_at = datetime.now()
            task.error = str(e)
            if self.logs_manager:
                await self.logs_manager.error(
                    f"[TaskManager] {Messages.TASK_FAILED.format(f'{task.task_id}: {e}')}"
                )
            raise

        finally:
            self.active_tasks.discard(task.task_id)

    async def _run_in_background(self, task: Task) -> None:
        try:
            await self.run_task(task)
        except Exception:
            # Already recorded on the task and logged by run_task
            pass
        finally:
            # Finished background tasks are only reachable through the Task returned by spawn()
            self.tasks.pop(task.task_id, None)

    async def spawn(self, coroutine: Coroutine, task_id: str = None) -> Task:
        """Schedule a coroutine to run in the background and return its Task."""
        task = await self.create_task(coroutine, task_id)
        task.future = asyncio.ensure_future(self._run_in_background(task))
        return task

    async def wait_for_background(self) -> None:
        """Join every background task started so far."""
        pending = [
            task.future for task in self.tasks.values()
            if task.future is not None and not task.future.done()
        ]
        if pending:
            await asyncio.wait_for(asyncio.gather(*pending), timeout=self.join_timeout)

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        return self.tasks.get(task_id)

    def get_active_tasks(self) -> List[Task]:
        """Get list of currently active tasks."""
        return [self.tasks[task_id] for task_id in self.active_tasks]
