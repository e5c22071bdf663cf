from datetime import datetime
from typing import List, Optional, Protocol

from core import Log, Project, Task


class EntityStore(Protocol):
    """Synchronous CRUD over projects, tasks and logs.

    Every method may raise StoreError (or NotFoundError for a missing row).
    """

    def list_projects(self) -> List[Project]:
        ...

    def create_project(self, name: str, summary: str, description: str, status: str) -> Project:
        ...

    def update_project(self, project_id: int, name: str, summary: str, description: str, status: str) -> Project:
        ...

    def delete_project(self, project_id: int) -> None:
        ...

    def list_tasks_for(self, project_id: int) -> List[Task]:
        ...

    def create_task(self, project_id: int, title: str, description: str) -> Task:
        ...

    def update_task(self, task_id: int, title: str, description: str, completed_at: Optional[datetime]) -> Task:
        ...

    def delete_task(self, task_id: int) -> None:
        ...

    def list_logs_for(self, project_id: int) -> List[Log]:
        ...

    def create_log(self, project_id: int, title: str, description: str) -> Log:
        ...

    def update_log(self, log_id: int, title: str, description: str) -> Log:
        ...

    def delete_log(self, log_id: int) -> None:
        ...
