import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional

from application.ports import EntityStore
from core import Log, NotFoundError, Project, StoreError, Task

logger = logging.getLogger("addae.store")

SCHEMA = """\
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    summary TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'todo'
        CHECK (status IN ('todo', 'in progress', 'completed', 'archived')),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    completed_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    title TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id);
CREATE INDEX IF NOT EXISTS idx_logs_project ON logs(project_id);
"""


def default_db_path() -> Path:
    """``$XDG_CONFIG_HOME/addae/addae.db`` (``~/.config`` when unset)."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "addae" / "addae.db"


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["id"],
        name=row["name"],
        summary=row["summary"] or "",
        description=row["description"] or "",
        status=row["status"],
        created_at=_ts(row["created_at"]),
        updated_at=_ts(row["updated_at"]),
    )


def _task(row: sqlite3.Row) -> Task:
    return Task(
        id=row["id"],
        project_id=row["project_id"],
        title=row["title"],
        description=row["description"] or "",
        completed_at=_ts(row["completed_at"]),
        created_at=_ts(row["created_at"]),
        updated_at=_ts(row["updated_at"]),
    )


def _log(row: sqlite3.Row) -> Log:
    return Log(
        id=row["id"],
        project_id=row["project_id"],
        title=row["title"] or "",
        description=row["description"] or "",
        created_at=_ts(row["created_at"]),
        updated_at=_ts(row["updated_at"]),
    )


class SqliteEntityStore(EntityStore):
    """EntityStore over a single SQLite connection, opened once per process."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else default_db_path()
        try:
            if str(self.path) != ":memory:":
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(str(self.path))
            self.conn.row_factory = sqlite3.Row
            self.conn.execute("PRAGMA foreign_keys=ON")
            self.conn.executescript(SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"cannot open database {self.path}: {exc}") from exc
        logger.debug("opened store at %s", self.path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "SqliteEntityStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _run(self, op: str, fn: Callable[[sqlite3.Connection], Any]) -> Any:
        try:
            with self.conn:
                return fn(self.conn)
        except sqlite3.Error as exc:
            logger.warning("%s failed: %s", op, exc)
            raise StoreError(f"{op} failed: {exc}") from exc

    def _fetch_one(self, table: str, row_id: int, label: str) -> sqlite3.Row:
        row = self._run(
            f"load {label}",
            lambda c: c.execute(f"SELECT * FROM {table} WHERE id = ?", (row_id,)).fetchone(),
        )
        if row is None:
            raise NotFoundError(f"{label} not found")
        return row

    # Projects -----------------------------------------------------------

    def list_projects(self) -> List[Project]:
        rows = self._run("list projects", lambda c: c.execute("SELECT * FROM projects ORDER BY id").fetchall())
        return [_project(r) for r in rows]

    def get_project(self, project_id: int) -> Project:
        return _project(self._fetch_one("projects", project_id, "project"))

    def create_project(self, name: str, summary: str, description: str, status: str) -> Project:
        stamp = _now()
        cur = self._run(
            "create project",
            lambda c: c.execute(
                "INSERT INTO projects (name, summary, description, status, created_at, updated_at)"
                " VALUES (?, ?, ?, ?, ?, ?)",
                (name, summary, description, status, stamp, stamp),
            ),
        )
        return self.get_project(cur.lastrowid)

    def update_project(self, project_id: int, name: str, summary: str, description: str, status: str) -> Project:
        cur = self._run(
            "update project",
            lambda c: c.execute(
                "UPDATE projects SET name = ?, summary = ?, description = ?, status = ?, updated_at = ? WHERE id = ?",
                (name, summary, description, status, _now(), project_id),
            ),
        )
        if cur.rowcount == 0:
            raise NotFoundError("project not found")
        return self.get_project(project_id)

    def delete_project(self, project_id: int) -> None:
        cur = self._run("delete project", lambda c: c.execute("DELETE FROM projects WHERE id = ?", (project_id,)))
        if cur.rowcount == 0:
            raise NotFoundError("project not found")

    # Tasks --------------------------------------------------------------

    def list_tasks_for(self, project_id: int) -> List[Task]:
        rows = self._run(
            "list tasks",
            lambda c: c.execute("SELECT * FROM tasks WHERE project_id = ? ORDER BY id", (project_id,)).fetchall(),
        )
        return [_task(r) for r in rows]

    def create_task(self, project_id: int, title: str, description: str) -> Task:
        self.get_project(project_id)
        stamp = _now()
        cur = self._run(
            "create task",
            lambda c: c.execute(
                "INSERT INTO tasks (project_id, title, description, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                (project_id, title, description, stamp, stamp),
            ),
        )
        return _task(self._fetch_one("tasks", cur.lastrowid, "task"))

    def update_task(self, task_id: int, title: str, description: str, completed_at: Optional[datetime]) -> Task:
        done = completed_at.isoformat() if completed_at is not None else None
        cur = self._run(
            "update task",
            lambda c: c.execute(
                "UPDATE tasks SET title = ?, description = ?, completed_at = ?, updated_at = ? WHERE id = ?",
                (title, description, done, _now(), task_id),
            ),
        )
        if cur.rowcount == 0:
            raise NotFoundError("task not found")
        return _task(self._fetch_one("tasks", task_id, "task"))

    def delete_task(self, task_id: int) -> None:
        cur = self._run("delete task", lambda c: c.execute("DELETE FROM tasks WHERE id = ?", (task_id,)))
        if cur.rowcount == 0:
            raise NotFoundError("task not found")

    # Logs ---------------------------------------------------------------

    def list_logs_for(self, project_id: int) -> List[Log]:
        rows = self._run(
            "list logs",
            lambda c: c.execute("SELECT * FROM logs WHERE project_id = ? ORDER BY id", (project_id,)).fetchall(),
        )
        return [_log(r) for r in rows]

    def create_log(self, project_id: int, title: str, description: str) -> Log:
        self.get_project(project_id)
        stamp = _now()
        cur = self._run(
            "create log",
            lambda c: c.execute(
                "INSERT INTO logs (project_id, title, description, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                (project_id, title, description, stamp, stamp),
            ),
        )
        return _log(self._fetch_one("logs", cur.lastrowid, "log"))

    def update_log(self, log_id: int, title: str, description: str) -> Log:
        cur = self._run(
            "update log",
            lambda c: c.execute(
                "UPDATE logs SET title = ?, description = ?, updated_at = ? WHERE id = ?",
                (title, description, _now(), log_id),
            ),
        )
        if cur.rowcount == 0:
            raise NotFoundError("log not found")
        return _log(self._fetch_one("logs", log_id, "log"))

    def delete_log(self, log_id: int) -> None:
        cur = self._run("delete log", lambda c: c.execute("DELETE FROM logs WHERE id = ?", (log_id,)))
        if cur.rowcount == 0:
            raise NotFoundError("log not found")


__all__ = ["SqliteEntityStore", "default_db_path", "SCHEMA"]
