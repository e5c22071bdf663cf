"""JSON shapes of projects, tasks and logs for CLI output."""

from datetime import datetime
from typing import Any, Dict, Optional

from core import Log, Project, Task


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def project_to_dict(project: Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "summary": project.summary,
        "description": project.description,
        "status": project.status,
        "created_at": _iso(project.created_at),
        "updated_at": _iso(project.updated_at),
    }


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "project_id": task.project_id,
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "completed_at": _iso(task.completed_at),
        "created_at": _iso(task.created_at),
        "updated_at": _iso(task.updated_at),
    }


def log_to_dict(log: Log) -> Dict[str, Any]:
    return {
        "id": log.id,
        "project_id": log.project_id,
        "title": log.title,
        "description": log.description,
        "created_at": _iso(log.created_at),
        "updated_at": _iso(log.updated_at),
    }


__all__ = ["project_to_dict", "task_to_dict", "log_to_dict"]
