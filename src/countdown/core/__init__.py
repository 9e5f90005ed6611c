"""Functional core - pure business logic with no I/O."""

from .tasks import Task, clean_title, tasks_from_api, replace_task, remove_task, prepend_task
from .deadline import (
    DeadlineStatus,
    Evaluation,
    evaluate,
    format_deadline,
    format_remaining,
    parse_deadline,
    to_local_input,
)

__all__ = [
    # Tasks
    "Task",
    "clean_title",
    "tasks_from_api",
    "replace_task",
    "remove_task",
    "prepend_task",
    # Deadlines
    "DeadlineStatus",
    "Evaluation",
    "evaluate",
    "format_deadline",
    "format_remaining",
    "parse_deadline",
    "to_local_input",
]
