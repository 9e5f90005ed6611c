"""Plain-text rendering of store snapshots. Reads state, never changes it."""

from dataclasses import dataclass
from datetime import datetime

from .core.deadline import DeadlineStatus, Evaluation, evaluate, format_clock, format_deadline
from .core.tasks import Task
from .store import StoreSnapshot


@dataclass(frozen=True)
class TaskRow:
    """A task with its derived presentation state at one instant."""

    task: Task
    evaluation: Evaluation
    due: str | None

    @property
    def inactive(self) -> bool:
        return self.task.completed or self.evaluation.status == DeadlineStatus.EXPIRED


def build_rows(tasks: tuple[Task, ...] | list[Task], now: datetime) -> list[TaskRow]:
    return [
        TaskRow(
            task=t,
            evaluation=evaluate(t.deadline, t.completed, now),
            due=format_deadline(t.deadline),
        )
        for t in tasks
    ]


def format_row(row: TaskRow) -> str:
    """One line per task: `[x] Title (due 2025-01-15 18:00) - 2h 5m  #id`."""
    mark = "[x]" if row.task.completed else "[ ]"
    line = f"{mark} {row.task.title}"
    if row.due:
        line += f" (due {row.due})"
    if row.evaluation.label:
        line += f" - {row.evaluation.label}"
    return f"{line}  #{row.task.id}"


def render_lines(snapshot: StoreSnapshot, now: datetime) -> list[str]:
    """Full view: clock header, status line, then task rows."""
    lines = [f"Now: {format_clock(now)}", ""]

    if snapshot.error:
        lines.append(f"Error: {snapshot.error}")
        lines.append("")

    if snapshot.loading:
        lines.append("Loading...")
    elif not snapshot.tasks:
        lines.append("No tasks yet.")
    else:
        lines.extend(format_row(row) for row in build_rows(snapshot.tasks, now))

    return lines


def row_to_json(row: TaskRow) -> dict:
    data = row.task.to_api()
    data["status"] = row.evaluation.status.value
    data["remaining"] = row.evaluation.remaining
    return data
