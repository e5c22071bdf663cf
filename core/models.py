from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .errors import ValidationError
from .status import DEFAULT_PROJECT_STATUS, normalize_project_status

NAME_MAX_LEN = 100
SUMMARY_MAX_LEN = 255
TITLE_MAX_LEN = 100


@dataclass(frozen=True)
class Project:
    id: int
    name: str
    summary: str = ""
    description: str = ""
    status: str = DEFAULT_PROJECT_STATUS
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Task:
    id: int
    project_id: int
    title: str
    description: str = ""
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        return self.completed_at is not None


@dataclass(frozen=True)
class Log:
    id: int
    project_id: int
    title: str = ""
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _check_length(field: str, value: str, limit: int) -> None:
    if len(value) > limit:
        raise ValidationError(field, f"{field} must be at most {limit} characters")


@dataclass(frozen=True)
class ProjectFormData:
    name: str
    summary: str = ""
    description: str = ""
    status: str = DEFAULT_PROJECT_STATUS

    def validate(self) -> "ProjectFormData":
        """Return a normalized copy or raise ValidationError."""
        name = self.name.strip()
        if not name:
            raise ValidationError("name", "project name is required")
        _check_length("name", name, NAME_MAX_LEN)
        _check_length("summary", self.summary, SUMMARY_MAX_LEN)
        try:
            status = normalize_project_status(self.status)
        except ValueError as exc:
            raise ValidationError("status", str(exc)) from exc
        return replace(self, name=name, status=status)


@dataclass(frozen=True)
class TaskFormData:
    title: str
    description: str = ""

    def validate(self) -> "TaskFormData":
        title = self.title.strip()
        if not title:
            raise ValidationError("title", "task title is required")
        _check_length("title", title, TITLE_MAX_LEN)
        return replace(self, title=title)


@dataclass(frozen=True)
class LogFormData:
    title: str = ""
    description: str = ""

    def validate(self) -> "LogFormData":
        title = self.title.strip()
        _check_length("title", title, TITLE_MAX_LEN)
        return replace(self, title=title)
