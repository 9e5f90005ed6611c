"""Task gateway interface."""

from typing import Protocol

from countdown.core.tasks import Task


class TaskGateway(Protocol):
    """Interface for the remote task collection.

    Every failure is raised as a TaskClientError subclass.
    """

    async def list(self) -> list[Task]:
        """Fetch all tasks."""
        ...

    async def create(self, title: str, deadline: str | None = None) -> Task:
        """Create a task and return it with its server-assigned id."""
        ...

    async def update(
        self,
        task_id: str,
        title: str,
        deadline: str | int | float | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Replace a task's fields and return the stored task."""
        ...

    async def delete(self, task_id: str) -> None:
        """Delete a task."""
        ...
