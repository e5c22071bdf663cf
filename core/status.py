from enum import Enum
from typing import Final, Literal


class ProjectStatus(Enum):
    TODO = ("todo", "status.todo", "◯")
    IN_PROGRESS = ("in progress", "status.progress", "◐")
    COMPLETED = ("completed", "status.completed", "●")
    ARCHIVED = ("archived", "status.archived", "▣")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]

    @property
    def icon(self) -> str:
        return self.value[2]

    @classmethod
    def from_string(cls, value: str) -> "ProjectStatus":
        code = normalize_project_status(value)
        for status in cls:
            if status.code == code:
                return status
        raise ValueError(f"Invalid project status: {value!r}")


ProjectStatusCode = Literal["todo", "in progress", "completed", "archived"]

DEFAULT_PROJECT_STATUS: Final[str] = "todo"

_CANONICAL_CODES: Final[frozenset[str]] = frozenset({"todo", "in progress", "completed", "archived"})

_ALIASES: Final[dict[str, str]] = {
    "inprogress": "in progress",
    "in_progress": "in progress",
    "in-progress": "in progress",
    "active": "in progress",
    "done": "completed",
}


def normalize_project_status(value: str) -> str:
    """Normalize project status input to the stored status code.

    Canonical project statuses: todo, in progress, completed, archived.
    Empty input maps to the default status (todo).
    """
    token = " ".join((value or "").strip().lower().split())
    if not token:
        return DEFAULT_PROJECT_STATUS
    token = _ALIASES.get(token, token)
    if token in _CANONICAL_CODES:
        return token
    raise ValueError(f"Invalid project status: {value!r}")


def project_status_label(status: str) -> str:
    """Upper-case label (TODO/IN PROGRESS/...) for any accepted status input."""
    try:
        return normalize_project_status(status).upper()
    except ValueError:
        return (status or "").strip().upper()


def status_choices() -> list[str]:
    return [status.code for status in ProjectStatus]
