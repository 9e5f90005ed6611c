"""Edit session - at most one in-progress task edit."""

import logging
from dataclasses import dataclass

from .core.deadline import to_local_input
from .store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class Draft:
    """Unsaved edits to one task."""

    task_id: str
    title: str
    deadline: str = ""


class EditSession:
    """
    Tracks the single task being edited.

    Beginning a new edit discards any unsaved draft. Committing goes through
    the store, so the task only changes once the server confirms.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self.draft: Draft | None = None

    @property
    def active(self) -> bool:
        return self.draft is not None

    @property
    def task_id(self) -> str | None:
        return self.draft.task_id if self.draft else None

    @property
    def draft_title(self) -> str | None:
        return self.draft.title if self.draft else None

    @property
    def draft_deadline(self) -> str | None:
        return self.draft.deadline if self.draft else None

    def is_editing(self, task_id: str) -> bool:
        return self.task_id == task_id

    def begin(self, task_id: str, title: str, deadline: str | None = None) -> Draft:
        if self.draft and self.draft.task_id != task_id:
            logger.debug(f"Discarding draft for {self.draft.task_id}")
        self.draft = Draft(task_id=task_id, title=title, deadline=to_local_input(deadline))
        return self.draft

    def update(self, title: str | None = None, deadline: str | None = None) -> None:
        """Change the open draft. An empty deadline string clears it."""
        if self.draft is None:
            return
        if title is not None:
            self.draft.title = title
        if deadline is not None:
            self.draft.deadline = deadline

    def cancel(self) -> None:
        self.draft = None

    async def commit(self) -> bool:
        """
        Save the draft.

        A blank title discards the draft silently. On failure the draft stays
        open so the user can retry.
        """
        draft = self.draft
        if draft is None:
            return False

        if not draft.title.strip():
            self.cancel()
            return False

        updated = await self.store.rename(draft.task_id, draft.title, draft.deadline or None)
        if updated is None:
            return False

        if self.draft is draft:
            self.draft = None
        return True
