"""Shared fixtures: an in-memory gateway standing in for the task server."""

import asyncio

import pytest

from countdown.core.tasks import Task, find_task, remove_task, replace_task


class FakeGateway:
    """
    In-memory TaskGateway.

    Records every call. Set `fail_with` to make the next call raise.
    Set `list_gate` to an asyncio.Event to hold list() until it is set;
    the list result is captured before waiting.
    """

    def __init__(self, tasks: list[Task] | None = None):
        self.tasks = list(tasks or [])
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None
        self.list_gate: asyncio.Event | None = None
        self._next_id = 100

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            err, self.fail_with = self.fail_with, None
            raise err

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def list(self) -> list[Task]:
        self.calls.append(("list",))
        self._maybe_fail()
        result = list(self.tasks)
        if self.list_gate is not None:
            await self.list_gate.wait()
        return result

    async def create(self, title: str, deadline: str | None = None) -> Task:
        self.calls.append(("create", title, deadline))
        self._maybe_fail()
        task = Task(id=str(self._next_id), title=title, deadline=deadline)
        self._next_id += 1
        self.tasks.insert(0, task)
        return task

    async def update(
        self,
        task_id: str,
        title: str,
        deadline: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        self.calls.append(("update", task_id, title, deadline, completed))
        self._maybe_fail()
        existing = find_task(self.tasks, task_id)
        done = existing.completed if existing and completed is None else bool(completed)
        task = Task(id=task_id, title=title, deadline=deadline, completed=done)
        self.tasks = replace_task(self.tasks, task)
        return task

    async def delete(self, task_id: str) -> None:
        self.calls.append(("delete", task_id))
        self._maybe_fail()
        self.tasks = remove_task(self.tasks, task_id)


@pytest.fixture
def sample_tasks():
    return [
        Task(id="1", title="Buy milk", deadline="2099-01-01T10:00", completed=False),
        Task(id="2", title="Write report", deadline=None, completed=False),
        Task(id="3", title="Call mom", deadline="2020-05-01T09:00", completed=True),
    ]


@pytest.fixture
def gateway(sample_tasks):
    return FakeGateway(sample_tasks)


@pytest.fixture
def empty_gateway():
    return FakeGateway()
