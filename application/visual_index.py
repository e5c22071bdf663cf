"""Visual ordering of tasks: pending first, then completed.

The partition is stable (input order is kept inside each group) and
completion time never reorders tasks. A visual index is a position in the
currently displayed sequence; completed tasks are only navigable when shown.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from core import Task


def partition_tasks(tasks: Sequence[Task]) -> Tuple[Tuple[Task, ...], Tuple[Task, ...]]:
    pending = tuple(t for t in tasks if t.completed_at is None)
    completed = tuple(t for t in tasks if t.completed_at is not None)
    return pending, completed


@dataclass(frozen=True)
class VisualTaskIndex:
    """Snapshot of a task collection as the task list displays it."""

    pending: Tuple[Task, ...]
    completed: Tuple[Task, ...]
    show_completed: bool = False

    @classmethod
    def build(cls, tasks: Sequence[Task], show_completed: bool) -> "VisualTaskIndex":
        pending, completed = partition_tasks(tasks)
        return cls(pending=pending, completed=completed, show_completed=show_completed)

    @property
    def max_navigable_index(self) -> int:
        """Highest navigable visual index, or -1 when nothing is navigable."""
        if self.show_completed:
            return len(self.pending) + len(self.completed) - 1
        return len(self.pending) - 1

    @property
    def visible_count(self) -> int:
        return self.max_navigable_index + 1

    def visible_tasks(self) -> Tuple[Task, ...]:
        if self.show_completed:
            return self.pending + self.completed
        return self.pending

    def task_at(self, index: int) -> Optional[Task]:
        if index < 0:
            return None
        if index < len(self.pending):
            return self.pending[index]
        if self.show_completed:
            offset = index - len(self.pending)
            if 0 <= offset < len(self.completed):
                return self.completed[offset]
        return None

    def index_of(self, task_id: int) -> Optional[int]:
        """Visual index of a task id, or None when hidden or absent."""
        for idx, task in enumerate(self.visible_tasks()):
            if task.id == task_id:
                return idx
        return None

    def clamp(self, cursor: int) -> int:
        return max(0, min(cursor, self.max_navigable_index))


def max_navigable_index(tasks: Sequence[Task], show_completed: bool) -> int:
    return VisualTaskIndex.build(tasks, show_completed).max_navigable_index


def visual_task_at(tasks: Sequence[Task], index: int, show_completed: bool) -> Optional[Task]:
    return VisualTaskIndex.build(tasks, show_completed).task_at(index)


def cursor_after_toggle(
    cursor: int,
    before: VisualTaskIndex,
    after: VisualTaskIndex,
    task_id: int,
    *,
    follow_completed: bool = True,
) -> int:
    """Cursor position after a completion toggle moved ``task_id``.

    With ``follow_completed`` the cursor steps back by one when a pending task
    at or before it disappears into the hidden completed group, so the same
    visual neighbourhood stays selected. The result is always clamped.
    """
    old_index = before.index_of(task_id)
    moved_out_of_view = (
        not after.show_completed
        and old_index is not None
        and old_index < len(before.pending)
        and after.index_of(task_id) is None
    )
    if follow_completed and moved_out_of_view and old_index <= cursor:
        cursor -= 1
    return after.clamp(cursor)


__all__ = [
    "VisualTaskIndex",
    "partition_tasks",
    "max_navigable_index",
    "visual_task_at",
    "cursor_after_toggle",
]
