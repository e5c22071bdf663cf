"""Session enums: controller outcome signals and the navigation state space."""

from enum import Enum


class Signal(Enum):
    """Outcome of a controller command; dictates the adapter's follow-up."""

    NONE = "none"
    REFRESH_PROJECT_LIST = "refresh_project_list"
    REFRESH_ACTIVE_PROJECT_VIEW = "refresh_active_project_view"
    QUIT = "quit"
    SHOW_ERROR = "show_error"


class ViewState(Enum):
    LIST = "list"
    PROJECT_DETAIL = "project_detail"
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    DELETE_PROJECT_CONFIRM = "delete_project_confirm"
    CREATE_TASK = "create_task"
    DELETE_TASK_CONFIRM = "delete_task_confirm"
    CREATE_LOG = "create_log"
    UPDATE_LOG = "update_log"
    DELETE_LOG_CONFIRM = "delete_log_confirm"
    FULLSCREEN_LOG_EDITOR = "fullscreen_log_editor"


class DetailTab(Enum):
    PROJECT = 0
    TASKS = 1
    LOGS = 2

    def shifted(self, delta: int) -> "DetailTab":
        tabs = list(DetailTab)
        return tabs[(tabs.index(self) + delta) % len(tabs)]


class TaskDetailMode(Enum):
    NONE = "none"
    READONLY = "readonly"
    EDIT = "edit"


class LogDetailMode(Enum):
    NONE = "none"
    READONLY = "readonly"


class LogFocus(Enum):
    LIST = "list"
    PAGER = "pager"


__all__ = ["Signal", "ViewState", "DetailTab", "TaskDetailMode", "LogDetailMode", "LogFocus"]
