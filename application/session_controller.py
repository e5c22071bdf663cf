"""Session controller: navigation, selection and the command/Signal protocol.

The controller is the single owner of session state. Presentation code reads
its attributes between events and changes them only through methods; every
command returns a ``Signal`` telling the adapter which follow-up to perform.
Failures never mutate the cache or the view: the message lands in ``error``
and the command returns ``Signal.SHOW_ERROR``.
"""

import logging
from datetime import datetime
from typing import List, Optional

from core import (
    AddaeError,
    Log,
    LogFormData,
    NotFoundError,
    PreconditionError,
    Project,
    ProjectFormData,
    Task,
    TaskFormData,
)

from .dialog import ConfirmDialog, DialogCursor, DialogKind
from .ports import EntityStore
from .signals import DetailTab, LogDetailMode, LogFocus, Signal, TaskDetailMode, ViewState
from .visual_index import VisualTaskIndex, cursor_after_toggle

logger = logging.getLogger("addae.controller")

# View a form returns to when aborted, plus the tab to land on.
_ABORT_TARGETS = {
    ViewState.CREATE_PROJECT: (ViewState.LIST, None),
    ViewState.UPDATE_PROJECT: (ViewState.PROJECT_DETAIL, None),
    ViewState.CREATE_TASK: (ViewState.PROJECT_DETAIL, DetailTab.TASKS),
    ViewState.CREATE_LOG: (ViewState.PROJECT_DETAIL, DetailTab.LOGS),
    ViewState.UPDATE_LOG: (ViewState.PROJECT_DETAIL, DetailTab.LOGS),
    ViewState.FULLSCREEN_LOG_EDITOR: (ViewState.PROJECT_DETAIL, DetailTab.LOGS),
}


class SessionController:
    def __init__(self, store: EntityStore, *, show_completed: bool = False, follow_completed: bool = True):
        self.store = store
        self.projects: List[Project] = list(store.list_projects())
        self.state: ViewState = ViewState.LIST
        self.active_tab: DetailTab = DetailTab.PROJECT
        self.task_detail_mode: TaskDetailMode = TaskDetailMode.NONE
        self.log_detail_mode: LogDetailMode = LogDetailMode.NONE
        self.log_focus: LogFocus = LogFocus.LIST
        self.selected_project: Optional[Project] = None
        self.selected_task_id: Optional[int] = None
        self.selected_log_id: Optional[int] = None
        self.tasks: List[Task] = []
        self.logs: List[Log] = []
        self.project_cursor: int = 0
        self.task_cursor: int = 0
        self.log_cursor: int = 0
        self.show_completed: bool = show_completed
        self.follow_completed: bool = follow_completed
        self.dialog = ConfirmDialog()
        self.error: Optional[str] = None

    # ------------------------------------------------------------------ helpers

    def _fail(self, exc: Exception) -> Signal:
        self.error = str(exc)
        logger.warning("command failed: %s", self.error)
        return Signal.SHOW_ERROR

    def _require_project(self) -> Project:
        if self.selected_project is None:
            raise PreconditionError("no project selected")
        return self.selected_project

    def _find_task(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def _find_log(self, log_id: int) -> Optional[Log]:
        for log in self.logs:
            if log.id == log_id:
                return log
        return None

    def _clear_project_cache(self) -> None:
        self.tasks = []
        self.logs = []
        self.selected_task_id = None
        self.selected_log_id = None
        self.task_cursor = 0
        self.log_cursor = 0
        self.task_detail_mode = TaskDetailMode.NONE
        self.log_detail_mode = LogDetailMode.NONE
        self.log_focus = LogFocus.LIST

    def _drop_dangling_selection(self) -> None:
        if self.selected_task_id is not None and self._find_task(self.selected_task_id) is None:
            self.selected_task_id = None
            self.task_detail_mode = TaskDetailMode.NONE
        if self.selected_log_id is not None and self._find_log(self.selected_log_id) is None:
            self.selected_log_id = None
            self.log_detail_mode = LogDetailMode.NONE
            self.log_focus = LogFocus.LIST

    def _clamp_cursors(self) -> None:
        self.task_cursor = self.task_index().clamp(self.task_cursor)
        self.log_cursor = max(0, min(self.log_cursor, len(self.logs) - 1))
        self.project_cursor = max(0, min(self.project_cursor, len(self.projects) - 1))

    def _reload_tasks(self, project: Project) -> None:
        self.tasks = list(self.store.list_tasks_for(project.id))
        self._drop_dangling_selection()
        self._clamp_cursors()

    def _reload_logs(self, project: Project) -> None:
        self.logs = list(self.store.list_logs_for(project.id))
        self._drop_dangling_selection()
        self._clamp_cursors()

    # -------------------------------------------------------------- read model

    @property
    def selected_task(self) -> Optional[Task]:
        if self.selected_task_id is None:
            return None
        return self._find_task(self.selected_task_id)

    @property
    def selected_log(self) -> Optional[Log]:
        if self.selected_log_id is None:
            return None
        return self._find_log(self.selected_log_id)

    @property
    def highlighted_project(self) -> Optional[Project]:
        if 0 <= self.project_cursor < len(self.projects):
            return self.projects[self.project_cursor]
        return None

    def task_index(self) -> VisualTaskIndex:
        return VisualTaskIndex.build(self.tasks, self.show_completed)

    def task_at_cursor(self) -> Optional[Task]:
        return self.task_index().task_at(self.task_cursor)

    def log_at(self, index: int) -> Optional[Log]:
        if 0 <= index < len(self.logs):
            return self.logs[index]
        return None

    def task_in_focus(self) -> Optional[Task]:
        """The open task detail when there is one, else the highlighted row."""
        if self.task_detail_mode is not TaskDetailMode.NONE and self.selected_task is not None:
            return self.selected_task
        return self.task_at_cursor()

    def log_in_focus(self) -> Optional[Log]:
        """The open log detail when there is one, else the highlighted row."""
        if self.log_detail_mode is LogDetailMode.READONLY and self.selected_log is not None:
            return self.selected_log
        return self.log_at(self.log_cursor)

    def clear_error(self) -> None:
        self.error = None

    # ---------------------------------------------------------------- refresh

    def refresh_projects(self) -> Signal:
        """Re-fetch the project list; re-resolve the selected project by id."""
        try:
            projects = list(self.store.list_projects())
        except AddaeError as exc:
            return self._fail(exc)
        self.projects = projects
        if self.selected_project is not None:
            current = next((p for p in projects if p.id == self.selected_project.id), None)
            if current is None:
                self.selected_project = None
                self._clear_project_cache()
                if self.state is ViewState.PROJECT_DETAIL:
                    self.state = ViewState.LIST
            else:
                self.selected_project = current
        self._clamp_cursors()
        self.error = None
        return Signal.NONE

    def refresh_active_project(self) -> Signal:
        """Re-fetch tasks and logs of the active project."""
        try:
            project = self._require_project()
            tasks = list(self.store.list_tasks_for(project.id))
            logs = list(self.store.list_logs_for(project.id))
        except AddaeError as exc:
            return self._fail(exc)
        self.tasks = tasks
        self.logs = logs
        self._drop_dangling_selection()
        self._clamp_cursors()
        self.error = None
        return Signal.NONE

    # ---------------------------------------------------------------- projects

    def move_project_cursor(self, delta: int) -> None:
        if not self.projects:
            self.project_cursor = 0
            return
        self.project_cursor = max(0, min(self.project_cursor + delta, len(self.projects) - 1))

    def select_project(self, index: int) -> Signal:
        if not 0 <= index < len(self.projects):
            return self._fail(NotFoundError("invalid project index"))
        project = self.projects[index]
        try:
            tasks = list(self.store.list_tasks_for(project.id))
            logs = list(self.store.list_logs_for(project.id))
        except AddaeError as exc:
            return self._fail(exc)
        self._clear_project_cache()
        self.selected_project = project
        self.project_cursor = index
        self.tasks = tasks
        self.logs = logs
        self.state = ViewState.PROJECT_DETAIL
        return Signal.NONE

    def create_project(self, form: ProjectFormData) -> Signal:
        try:
            data = form.validate()
            created = self.store.create_project(data.name, data.summary, data.description, data.status)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("created project %s", created.id)
        self.state = ViewState.LIST
        return Signal.REFRESH_PROJECT_LIST

    def update_project(self, form: ProjectFormData) -> Signal:
        try:
            project = self._require_project()
            data = form.validate()
            updated = self.store.update_project(project.id, data.name, data.summary, data.description, data.status)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("updated project %s", updated.id)
        self.selected_project = updated
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_PROJECT_LIST

    def delete_project(self, index: int) -> Signal:
        if not 0 <= index < len(self.projects):
            return self._fail(NotFoundError("invalid project index"))
        return self._delete_project(self.projects[index])

    def _delete_project(self, project: Project) -> Signal:
        try:
            self.store.delete_project(project.id)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("deleted project %s", project.id)
        if self.selected_project is not None and self.selected_project.id == project.id:
            self.selected_project = None
            self._clear_project_cache()
        self.state = ViewState.LIST
        return Signal.REFRESH_PROJECT_LIST

    # ------------------------------------------------------------------- tasks

    def create_task(self, form: TaskFormData) -> Signal:
        try:
            project = self._require_project()
            data = form.validate()
            created = self.store.create_task(project.id, data.title, data.description)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("created task %s in project %s", created.id, project.id)
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def update_task(self, task_id: int, form: TaskFormData) -> Signal:
        """Edit title/description; completion state is carried over unchanged."""
        try:
            project = self._require_project()
            task = self._find_task(task_id)
            if task is None:
                raise NotFoundError("task not found")
            data = form.validate()
            self.store.update_task(task.id, data.title, data.description, task.completed_at)
            self._reload_tasks(project)
        except AddaeError as exc:
            return self._fail(exc)
        if self.task_detail_mode is TaskDetailMode.EDIT:
            self.task_detail_mode = TaskDetailMode.READONLY
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def toggle_task_completion(self, task_id: int, new_completed_at: Optional[datetime]) -> Signal:
        """Persist a completion change and re-fetch tasks. The cursor is left alone."""
        try:
            project = self._require_project()
            task = self._find_task(task_id)
            if task is None:
                raise NotFoundError("task not found")
            self.store.update_task(task.id, task.title, task.description, new_completed_at)
            self._reload_tasks(project)
        except AddaeError as exc:
            return self._fail(exc)
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def reconcile_task_cursor(self, before: VisualTaskIndex, task_id: int) -> None:
        """Apply the post-toggle cursor policy against the current task list."""
        self.task_cursor = cursor_after_toggle(
            self.task_cursor,
            before,
            self.task_index(),
            task_id,
            follow_completed=self.follow_completed,
        )
        if self.task_detail_mode is TaskDetailMode.READONLY and self.selected_task_id == task_id:
            current = self.task_at_cursor()
            if current is not None:
                self.selected_task_id = current.id

    def delete_task(self, task_id: int) -> Signal:
        try:
            project = self._require_project()
            self.store.delete_task(task_id)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("deleted task %s", task_id)
        if self.selected_task_id == task_id:
            self.selected_task_id = None
            self.task_detail_mode = TaskDetailMode.NONE
        try:
            self._reload_tasks(project)
        except AddaeError as exc:
            return self._fail(exc)
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def select_task(self, visual_index: int) -> Signal:
        task = self.task_index().task_at(visual_index)
        if task is None:
            return self._fail(NotFoundError("invalid task index"))
        self.selected_task_id = task.id
        self.task_cursor = visual_index
        self.task_detail_mode = TaskDetailMode.READONLY
        return Signal.NONE

    def move_task_cursor(self, delta: int) -> None:
        index = self.task_index()
        self.task_cursor = index.clamp(self.task_cursor + delta)
        if self.task_detail_mode is TaskDetailMode.READONLY:
            task = index.task_at(self.task_cursor)
            if task is not None:
                self.selected_task_id = task.id

    def toggle_show_completed(self) -> None:
        self.show_completed = not self.show_completed
        index = self.task_index()
        self.task_cursor = index.clamp(self.task_cursor)
        if self.selected_task_id is None or index.index_of(self.selected_task_id) is not None:
            return
        # the open detail went out of view: follow the cursor like move_task_cursor
        current = index.task_at(self.task_cursor)
        if current is None:
            self.close_task_detail()
        else:
            self.selected_task_id = current.id
            self.task_detail_mode = TaskDetailMode.READONLY

    def open_task_detail(self) -> Signal:
        return self.select_task(self.task_cursor)

    def edit_task_detail(self) -> Signal:
        if self.selected_task is None:
            signal = self.select_task(self.task_cursor)
            if signal is Signal.SHOW_ERROR:
                return signal
        self.task_detail_mode = TaskDetailMode.EDIT
        return Signal.NONE

    def cancel_task_edit(self) -> None:
        if self.task_detail_mode is TaskDetailMode.EDIT:
            self.task_detail_mode = TaskDetailMode.READONLY if self.selected_task else TaskDetailMode.NONE

    def close_task_detail(self) -> None:
        self.selected_task_id = None
        self.task_detail_mode = TaskDetailMode.NONE

    # -------------------------------------------------------------------- logs

    def create_log(self, form: LogFormData) -> Signal:
        try:
            project = self._require_project()
            data = form.validate()
            created = self.store.create_log(project.id, data.title, data.description)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("created log %s in project %s", created.id, project.id)
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def update_log(self, form: LogFormData) -> Signal:
        try:
            project = self._require_project()
            log = self.selected_log
            if log is None:
                raise PreconditionError("no log selected")
            data = form.validate()
            self.store.update_log(log.id, data.title, data.description)
            self._reload_logs(project)
        except AddaeError as exc:
            return self._fail(exc)
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def delete_log(self, log_id: int) -> Signal:
        try:
            project = self._require_project()
            self.store.delete_log(log_id)
        except AddaeError as exc:
            return self._fail(exc)
        logger.debug("deleted log %s", log_id)
        if self.selected_log_id == log_id:
            self.selected_log_id = None
            self.log_detail_mode = LogDetailMode.NONE
            self.log_focus = LogFocus.LIST
        try:
            self._reload_logs(project)
        except AddaeError as exc:
            return self._fail(exc)
        self.state = ViewState.PROJECT_DETAIL
        return Signal.REFRESH_ACTIVE_PROJECT_VIEW

    def select_log(self, index: int) -> Signal:
        log = self.log_at(index)
        if log is None:
            return self._fail(NotFoundError("invalid log index"))
        self.selected_log_id = log.id
        self.log_cursor = index
        self.log_detail_mode = LogDetailMode.READONLY
        self.log_focus = LogFocus.LIST
        return Signal.NONE

    def move_log_cursor(self, delta: int) -> None:
        if not self.logs:
            self.log_cursor = 0
            return
        self.log_cursor = max(0, min(self.log_cursor + delta, len(self.logs) - 1))
        if self.log_detail_mode is LogDetailMode.READONLY:
            self.selected_log_id = self.logs[self.log_cursor].id

    def open_log_detail(self) -> Signal:
        return self.select_log(self.log_cursor)

    def close_log_detail(self) -> None:
        self.selected_log_id = None
        self.log_detail_mode = LogDetailMode.NONE
        self.log_focus = LogFocus.LIST

    def switch_log_focus(self) -> None:
        if self.log_detail_mode is not LogDetailMode.READONLY:
            return
        self.log_focus = LogFocus.PAGER if self.log_focus is LogFocus.LIST else LogFocus.LIST

    # -------------------------------------------------------------------- tabs

    def set_tab(self, tab: DetailTab) -> None:
        self.active_tab = tab
        self.selected_task_id = None
        self.selected_log_id = None
        self.task_detail_mode = TaskDetailMode.NONE
        self.log_detail_mode = LogDetailMode.NONE
        self.log_focus = LogFocus.LIST

    def next_tab(self) -> None:
        self.set_tab(self.active_tab.shifted(1))

    def previous_tab(self) -> None:
        self.set_tab(self.active_tab.shifted(-1))

    # ------------------------------------------------------------- transitions

    def go_to_list_view(self) -> Signal:
        self.state = ViewState.LIST
        return Signal.NONE

    def go_to_project_view(self) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        self.state = ViewState.PROJECT_DETAIL
        return Signal.NONE

    def go_to_create_view(self) -> Signal:
        self.state = ViewState.CREATE_PROJECT
        return Signal.NONE

    def go_to_update_view(self) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        self.state = ViewState.UPDATE_PROJECT
        return Signal.NONE

    def go_to_create_task_view(self) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        self.state = ViewState.CREATE_TASK
        return Signal.NONE

    def go_to_create_log_view(self) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        self.state = ViewState.CREATE_LOG
        return Signal.NONE

    def go_to_fullscreen_log_editor(self) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        self.state = ViewState.FULLSCREEN_LOG_EDITOR
        return Signal.NONE

    def go_to_update_log_view(self) -> Signal:
        if self.selected_log is None:
            return self._fail(PreconditionError("no log selected"))
        self.state = ViewState.UPDATE_LOG
        return Signal.NONE

    def go_to_delete_view(self, index: Optional[int] = None) -> Signal:
        """Open the project delete dialog for ``index`` (default: highlighted row)."""
        if index is None:
            index = self.project_cursor
        project = self.projects[index] if 0 <= index < len(self.projects) else None
        if project is None:
            return self._fail(NotFoundError("invalid project index"))
        return self._open_dialog(
            DialogKind.PROJECT_DELETE,
            ViewState.DELETE_PROJECT_CONFIRM,
            lambda: self._delete_project(project),
            project.name,
        )

    def go_to_delete_task_view(self, task_id: Optional[int] = None) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        if task_id is None:
            task = self.task_in_focus()
        else:
            task = self._find_task(task_id)
        if task is None:
            return self._fail(NotFoundError("task not found"))
        return self._open_dialog(
            DialogKind.TASK_DELETE,
            ViewState.DELETE_TASK_CONFIRM,
            lambda: self.delete_task(task.id),
            task.title,
        )

    def go_to_delete_log_view(self, log_id: Optional[int] = None) -> Signal:
        if self.selected_project is None:
            return self._fail(PreconditionError("no project selected"))
        if log_id is None:
            log = self.log_in_focus()
        else:
            log = self._find_log(log_id)
        if log is None:
            return self._fail(NotFoundError("log not found"))
        return self._open_dialog(
            DialogKind.LOG_DELETE,
            ViewState.DELETE_LOG_CONFIRM,
            lambda: self.delete_log(log.id),
            log.title,
        )

    def abort_form(self) -> Signal:
        target, tab = _ABORT_TARGETS.get(self.state, (None, None))
        if target is None:
            return Signal.NONE
        if target is ViewState.PROJECT_DETAIL and self.selected_project is None:
            target = ViewState.LIST
        self.state = target
        if tab is not None and self.active_tab is not tab:
            self.set_tab(tab)
        return Signal.NONE

    def quit(self) -> Signal:
        return Signal.QUIT

    # ------------------------------------------------------------------ dialog

    def _open_dialog(self, kind: DialogKind, state: ViewState, action, subject: str) -> Signal:
        return_state = self.state

        def _restore() -> None:
            self.state = return_state

        self.dialog.open(kind, action, subject=subject, on_close=_restore)
        self.state = state
        return Signal.NONE

    def handle_dialog_key(self, key: str) -> Signal:
        return self.dialog.handle_key(key)

    def confirm_delete(self, confirmed: bool) -> Signal:
        """Resolve the open dialog; the bound action runs only when confirmed."""
        if not self.dialog.is_open:
            return Signal.NONE
        self.dialog.cursor = DialogCursor.CONFIRM if confirmed else DialogCursor.CANCEL
        return self.dialog.accept()


__all__ = ["SessionController"]
