"""Pure task domain logic - no I/O dependencies."""

import json
from dataclasses import dataclass

from countdown.errors import MalformedResponse, ValidationFailure

PREVIEW_LENGTH = 100


@dataclass(frozen=True)
class Task:
    """A task as held by the remote store."""

    id: str
    title: str
    # Raw wire value: an ISO-8601 string, or epoch milliseconds
    deadline: str | int | float | None = None
    completed: bool = False

    def to_api(self) -> dict:
        """Wire representation."""
        data = {"id": self.id, "title": self.title, "completed": self.completed}
        if self.deadline is not None:
            data["deadline"] = self.deadline
        return data

    @classmethod
    def from_api(cls, data: object) -> "Task":
        """Create Task from an API record, rejecting anything not Task-shaped."""
        if not isinstance(data, dict):
            raise MalformedResponse(preview(data))

        # Older backends only expose the Mongo document id
        task_id = data.get("id", data.get("_id"))
        title = data.get("title")
        if not isinstance(task_id, str) or not task_id or not isinstance(title, str):
            raise MalformedResponse(preview(data))

        deadline = data.get("deadline")
        if deadline == "" or isinstance(deadline, bool):
            deadline = None
        elif deadline is not None and not isinstance(deadline, (str, int, float)):
            deadline = str(deadline)

        return cls(
            id=task_id,
            title=title,
            deadline=deadline,
            completed=bool(data.get("completed", False)),
        )


def preview(payload: object, limit: int = PREVIEW_LENGTH) -> str:
    """Short JSON rendering of a payload for error messages."""
    try:
        text = json.dumps(payload, ensure_ascii=False, default=str)
    except ValueError:
        text = repr(payload)
    return text[:limit]


def clean_title(title: str | None) -> str:
    """Trim a title, raising ValidationFailure when nothing is left."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationFailure("Title must not be empty.")
    return cleaned


def tasks_from_api(payload: object) -> list[Task]:
    """Validate a list payload as a sequence of tasks."""
    if not isinstance(payload, list):
        raise MalformedResponse(preview(payload))
    return [Task.from_api(item) for item in payload]


def replace_task(tasks: list[Task], updated: Task) -> list[Task]:
    """Replace the task with the same id, preserving order."""
    return [updated if t.id == updated.id else t for t in tasks]


def remove_task(tasks: list[Task], task_id: str) -> list[Task]:
    return [t for t in tasks if t.id != task_id]


def prepend_task(tasks: list[Task], created: Task) -> list[Task]:
    """Put a newly created task first, dropping any stale copy with its id."""
    return [created] + remove_task(tasks, created.id)


def find_task(tasks: list[Task], task_id: str) -> Task | None:
    return next((t for t in tasks if t.id == task_id), None)
