from .status import ProjectStatus, DEFAULT_PROJECT_STATUS, normalize_project_status, project_status_label
from .models import (
    Project,
    Task,
    Log,
    ProjectFormData,
    TaskFormData,
    LogFormData,
    NAME_MAX_LEN,
    SUMMARY_MAX_LEN,
    TITLE_MAX_LEN,
)
from .errors import (
    AddaeError,
    NotFoundError,
    PreconditionError,
    ValidationError,
    StoreError,
)

__all__ = [
    "ProjectStatus",
    "DEFAULT_PROJECT_STATUS",
    "normalize_project_status",
    "project_status_label",
    # Records
    "Project",
    "Task",
    "Log",
    # Forms
    "ProjectFormData",
    "TaskFormData",
    "LogFormData",
    "NAME_MAX_LEN",
    "SUMMARY_MAX_LEN",
    "TITLE_MAX_LEN",
    # Errors
    "AddaeError",
    "NotFoundError",
    "PreconditionError",
    "ValidationError",
    "StoreError",
]
