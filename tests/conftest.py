from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional

import pytest

from application.session_controller import SessionController
from core import Log, NotFoundError, Project, StoreError, Task


class MemoryStore:
    """In-memory EntityStore; ``fail_on`` names methods that raise StoreError."""

    def __init__(self):
        self.projects: Dict[int, Project] = {}
        self.tasks: Dict[int, Task] = {}
        self.logs: Dict[int, Log] = {}
        self.fail_on: set = set()
        self.calls: List[str] = []
        self._next_id = 1

    def _tick(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise StoreError(f"{name} failed")

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def list_projects(self) -> List[Project]:
        self._tick("list_projects")
        return list(self.projects.values())

    def create_project(self, name, summary, description, status) -> Project:
        self._tick("create_project")
        project = Project(id=self._new_id(), name=name, summary=summary, description=description, status=status)
        self.projects[project.id] = project
        return project

    def update_project(self, project_id, name, summary, description, status) -> Project:
        self._tick("update_project")
        if project_id not in self.projects:
            raise NotFoundError("project not found")
        project = replace(self.projects[project_id], name=name, summary=summary, description=description, status=status)
        self.projects[project_id] = project
        return project

    def delete_project(self, project_id) -> None:
        self._tick("delete_project")
        if self.projects.pop(project_id, None) is None:
            raise NotFoundError("project not found")
        self.tasks = {k: t for k, t in self.tasks.items() if t.project_id != project_id}
        self.logs = {k: lg for k, lg in self.logs.items() if lg.project_id != project_id}

    def list_tasks_for(self, project_id) -> List[Task]:
        self._tick("list_tasks_for")
        return [t for t in self.tasks.values() if t.project_id == project_id]

    def create_task(self, project_id, title, description) -> Task:
        self._tick("create_task")
        task = Task(id=self._new_id(), project_id=project_id, title=title, description=description)
        self.tasks[task.id] = task
        return task

    def update_task(self, task_id, title, description, completed_at: Optional[datetime]) -> Task:
        self._tick("update_task")
        if task_id not in self.tasks:
            raise NotFoundError("task not found")
        task = replace(self.tasks[task_id], title=title, description=description, completed_at=completed_at)
        self.tasks[task_id] = task
        return task

    def delete_task(self, task_id) -> None:
        self._tick("delete_task")
        if self.tasks.pop(task_id, None) is None:
            raise NotFoundError("task not found")

    def list_logs_for(self, project_id) -> List[Log]:
        self._tick("list_logs_for")
        return [lg for lg in self.logs.values() if lg.project_id == project_id]

    def create_log(self, project_id, title, description) -> Log:
        self._tick("create_log")
        log = Log(id=self._new_id(), project_id=project_id, title=title, description=description)
        self.logs[log.id] = log
        return log

    def update_log(self, log_id, title, description) -> Log:
        self._tick("update_log")
        if log_id not in self.logs:
            raise NotFoundError("log not found")
        log = replace(self.logs[log_id], title=title, description=description)
        self.logs[log_id] = log
        return log

    def delete_log(self, log_id) -> None:
        self._tick("delete_log")
        if self.logs.pop(log_id, None) is None:
            raise NotFoundError("log not found")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def seeded_store(store) -> MemoryStore:
    """Two projects; the first owns tasks A, B (pending), C, D (completed) and two logs."""
    alpha = store.create_project("Alpha", "first", "", "todo")
    store.create_project("Beta", "second", "", "in progress")
    done = datetime(2024, 1, 2, 3, 4, 5)
    for title in ("A", "B", "C", "D"):
        task = store.create_task(alpha.id, title, "")
        if title in ("C", "D"):
            store.update_task(task.id, task.title, task.description, done)
    store.create_log(alpha.id, "kickoff", "notes")
    store.create_log(alpha.id, "", "untitled body")
    store.calls.clear()
    return store


@pytest.fixture
def controller(seeded_store) -> SessionController:
    return SessionController(seeded_store)
