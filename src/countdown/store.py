"""Task store - the client's authoritative copy of the task collection.

The store is mutated only when a gateway call completes (or is skipped by a
guard). Every gateway failure is caught here and recorded as a message, so
views only ever see a snapshot and the latest error.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .core.tasks import (
    Task,
    find_task,
    prepend_task,
    remove_task,
    replace_task,
)
from .errors import TaskClientError
from .ports.task_gateway import TaskGateway

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Delete this task?"
TASK_NOT_FOUND = "Task not found."


@dataclass(frozen=True)
class StoreSnapshot:
    """Read-only view of the store for rendering."""

    tasks: tuple[Task, ...] = ()
    error: str | None = None
    loading: bool = False


Listener = Callable[[StoreSnapshot], None]
ConfirmGate = Callable[[str], bool]


def _never_confirm(prompt: str) -> bool:
    return False


class TaskStore:
    """Holds the task collection and applies gateway results to it."""

    def __init__(self, gateway: TaskGateway, confirm: ConfirmGate | None = None):
        self.gateway = gateway
        # Deletes are declined unless the caller supplies a real gate
        self.confirm = confirm or _never_confirm
        self._tasks: list[Task] = []
        self._error: str | None = None
        self._pending_refreshes = 0
        self._listeners: list[Listener] = []

    # ============== Read access ==============

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._pending_refreshes > 0

    def get(self, task_id: str) -> Task | None:
        return find_task(self._tasks, task_id)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(tasks=tuple(self._tasks), error=self._error, loading=self.loading)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _fail(self, action: str, err: TaskClientError) -> None:
        logger.error(f"{action} failed: {err}")
        self._error = str(err)

    # ============== Intents ==============

    async def refresh(self) -> bool:
        """Replace the collection with the server's. On failure the collection is emptied."""
        self._error = None
        self._pending_refreshes += 1
        self._notify()
        try:
            tasks = await self.gateway.list()
        except TaskClientError as e:
            self._tasks = []
            self._fail("Loading tasks", e)
            return False
        else:
            self._tasks = tasks
            logger.info(f"Loaded {len(tasks)} tasks")
            return True
        finally:
            self._pending_refreshes -= 1
            self._notify()

    async def add(self, title: str, deadline: str | None = None) -> Task | None:
        """Create a task and put it first. Blank titles are ignored."""
        if not title or not title.strip():
            return None

        self._error = None
        try:
            created = await self.gateway.create(title.strip(), deadline or None)
        except TaskClientError as e:
            self._fail("Adding task", e)
            self._notify()
            return None

        self._tasks = prepend_task(self._tasks, created)
        logger.info(f"Added task {created.id}")
        self._notify()
        return created

    async def _update(
        self,
        action: str,
        task_id: str,
        title: str,
        deadline: str | int | float | None,
        completed: bool | None = None,
    ) -> Task | None:
        self._error = None
        try:
            updated = await self.gateway.update(task_id, title, deadline, completed)
        except TaskClientError as e:
            self._fail(action, e)
            self._notify()
            return None

        self._tasks = replace_task(self._tasks, updated)
        logger.info(f"{action} {task_id} done")
        self._notify()
        return updated

    async def rename(self, task_id: str, title: str, deadline: str | None = None) -> Task | None:
        """Change a task's title and deadline."""
        return await self._update("Updating task", task_id, title.strip(), deadline or None)

    async def toggle(self, task_id: str) -> Task | None:
        """Flip completion, resending the unchanged title and deadline."""
        task = self.get(task_id)
        if task is None:
            self._error = TASK_NOT_FOUND
            self._notify()
            return None

        return await self._update(
            "Toggling task", task_id, task.title, task.deadline, completed=not task.completed
        )

    async def remove(self, task_id: str) -> bool:
        """Delete a task after the confirmation gate agrees."""
        if not self.confirm(DELETE_PROMPT):
            logger.debug(f"Delete of {task_id} cancelled")
            return False

        self._error = None
        try:
            await self.gateway.delete(task_id)
        except TaskClientError as e:
            self._fail("Deleting task", e)
            self._notify()
            return False

        self._tasks = remove_task(self._tasks, task_id)
        logger.info(f"Deleted task {task_id}")
        self._notify()
        return True
