"""Key dispatch table: (ViewState, DetailTab, mode) -> ordered bindings.

Resolution walks the ordered list and returns the first action whose key set
contains the pressed key. An open dialog intercepts everything; read-only
detail views list their back-navigation before the shared detail keys.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from application.dialog import ACCEPT_KEYS, CANCEL_KEYS, CONFIRM_SHORTCUT_KEYS, FLIP_KEYS
from application.session_controller import SessionController
from application.signals import DetailTab, LogDetailMode, LogFocus, TaskDetailMode, ViewState

Binding = Tuple[Tuple[str, ...], str]
Mode = Union[TaskDetailMode, LogDetailMode, LogFocus, None]
ContextKey = Tuple[ViewState, Optional[DetailTab], Mode]

BACK_KEYS: Tuple[str, ...] = ("escape", "b", "c-c")
UP_KEYS: Tuple[str, ...] = ("up", "k")
DOWN_KEYS: Tuple[str, ...] = ("down", "j")

# Cyrillic layout twins of the latin command keys.
LAYOUT_ALIASES: Dict[str, str] = {
    "й": "q",
    "о": "j",
    "л": "k",
    "т": "n",
    "в": "d",
    "у": "e",
    "г": "u",
    "д": "l",
    "с": "c",
    "и": "b",
    "н": "y",
    "р": "h",
}

DIALOG_BINDINGS: List[Binding] = [
    (FLIP_KEYS + CANCEL_KEYS + ACCEPT_KEYS + CONFIRM_SHORTCUT_KEYS, "dialog_key"),
]

HELP_BINDINGS: List[Binding] = [
    (("escape", "?", "q", "enter"), "toggle_help"),
]

FORM_BINDINGS: List[Binding] = [
    (("escape",), "abort_form"),
    (("c-s",), "submit_form"),
    (("tab",), "next_field"),
    (("s-tab",), "previous_field"),
]

FORM_CHOICE_BINDINGS: List[Binding] = [
    (("left", "h"), "choice_previous"),
    (("right", "l", "space"), "choice_next"),
    (("enter",), "next_field"),
]

FORM_SINGLE_LINE_BINDINGS: List[Binding] = [
    (("enter",), "next_field"),
]

LIST_BINDINGS: List[Binding] = [
    (UP_KEYS, "project_up"),
    (DOWN_KEYS, "project_down"),
    (("enter",), "open_project"),
    (("n",), "new_project"),
    (("d",), "delete_project"),
    (("q", "c-c"), "quit"),
    (("?",), "toggle_help"),
]

DETAIL_COMMON_BINDINGS: List[Binding] = [
    (("1",), "tab_project"),
    (("2",), "tab_tasks"),
    (("3",), "tab_logs"),
    (("left", "c-h"), "previous_tab"),
    (("right", "c-l"), "next_tab"),
    (("u",), "edit_project"),
    (BACK_KEYS, "back"),
    (("?",), "toggle_help"),
]

PROJECT_TAB_BINDINGS: List[Binding] = [
    (("e",), "edit_project"),
]

TASK_LIST_BINDINGS: List[Binding] = [
    (UP_KEYS, "task_up"),
    (DOWN_KEYS, "task_down"),
    (("space",), "toggle_task"),
    (("enter",), "open_task"),
    (("e",), "edit_task"),
    (("n",), "new_task"),
    (("d",), "delete_task"),
    (("c",), "toggle_completed"),
]

TASK_READONLY_BINDINGS: List[Binding] = [
    (BACK_KEYS, "close_task"),
    (UP_KEYS, "task_up"),
    (DOWN_KEYS, "task_down"),
    (("space",), "toggle_task"),
    (("e", "enter"), "edit_task"),
    (("d",), "delete_task"),
    (("c",), "toggle_completed"),
]

LOG_LIST_BINDINGS: List[Binding] = [
    (UP_KEYS, "log_up"),
    (DOWN_KEYS, "log_down"),
    (("enter",), "open_log"),
    (("n",), "new_log"),
    (("N",), "fullscreen_log"),
    (("e",), "edit_log"),
    (("d",), "delete_log"),
]

LOG_READONLY_BINDINGS: List[Binding] = [
    (BACK_KEYS, "close_log"),
    (("tab",), "switch_log_focus"),
    (UP_KEYS, "log_up"),
    (DOWN_KEYS, "log_down"),
    (("e", "enter"), "edit_log"),
    (("d",), "delete_log"),
]

LOG_PAGER_BINDINGS: List[Binding] = [
    (BACK_KEYS, "close_log"),
    (("tab",), "switch_log_focus"),
    (UP_KEYS, "pager_up"),
    (DOWN_KEYS, "pager_down"),
    (("e",), "edit_log"),
    (("d",), "delete_log"),
]

STATE_TABLE: Dict[ContextKey, List[Binding]] = {
    (ViewState.LIST, None, None): LIST_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.PROJECT, None): PROJECT_TAB_BINDINGS + DETAIL_COMMON_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.TASKS, TaskDetailMode.NONE): TASK_LIST_BINDINGS + DETAIL_COMMON_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.TASKS, TaskDetailMode.READONLY): TASK_READONLY_BINDINGS + DETAIL_COMMON_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.LOGS, LogDetailMode.NONE): LOG_LIST_BINDINGS + DETAIL_COMMON_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.LOGS, LogDetailMode.READONLY): LOG_READONLY_BINDINGS + DETAIL_COMMON_BINDINGS,
    (ViewState.PROJECT_DETAIL, DetailTab.LOGS, LogFocus.PAGER): LOG_PAGER_BINDINGS + DETAIL_COMMON_BINDINGS,
}

FORM_STATES = frozenset(
    {
        ViewState.CREATE_PROJECT,
        ViewState.UPDATE_PROJECT,
        ViewState.CREATE_TASK,
        ViewState.CREATE_LOG,
        ViewState.UPDATE_LOG,
        ViewState.FULLSCREEN_LOG_EDITOR,
    }
)


def context_key(controller: SessionController) -> ContextKey:
    state = controller.state
    if state is not ViewState.PROJECT_DETAIL:
        return (state, None, None)
    tab = controller.active_tab
    if tab is DetailTab.TASKS:
        return (state, tab, controller.task_detail_mode)
    if tab is DetailTab.LOGS:
        if controller.log_detail_mode is LogDetailMode.READONLY and controller.log_focus is LogFocus.PAGER:
            return (state, tab, LogFocus.PAGER)
        return (state, tab, controller.log_detail_mode)
    return (state, tab, None)


def bindings_for(controller: SessionController, form=None, *, help_visible: bool = False) -> List[Binding]:
    """Ordered bindings active for the controller state and the open form, if any."""
    if controller.dialog.is_open:
        return DIALOG_BINDINGS
    if help_visible:
        return HELP_BINDINGS
    if form is not None:
        active = form.active_field
        if active.is_choice:
            return FORM_CHOICE_BINDINGS + FORM_BINDINGS
        if not active.multiline:
            return FORM_SINGLE_LINE_BINDINGS + FORM_BINDINGS
        return FORM_BINDINGS
    return STATE_TABLE.get(context_key(controller), [])


def normalize_key(key: str) -> str:
    return LAYOUT_ALIASES.get(key, key)


def resolve(bindings: Iterable[Binding], key: str) -> Optional[str]:
    key = normalize_key(key)
    for keys, action in bindings:
        if key in keys:
            return action
    return None


def all_keys() -> List[str]:
    """Every key any table mentions, in first-seen order, layout twins included."""
    seen: List[str] = []
    tables: List[List[Binding]] = [
        DIALOG_BINDINGS,
        HELP_BINDINGS,
        FORM_BINDINGS,
        FORM_CHOICE_BINDINGS,
        FORM_SINGLE_LINE_BINDINGS,
        *STATE_TABLE.values(),
    ]
    for table in tables:
        for keys, _action in table:
            for key in keys:
                if key not in seen:
                    seen.append(key)
    for alias, target in LAYOUT_ALIASES.items():
        if target in seen and alias not in seen:
            seen.append(alias)
    return seen


__all__ = [
    "Binding",
    "STATE_TABLE",
    "FORM_STATES",
    "LAYOUT_ALIASES",
    "context_key",
    "bindings_for",
    "normalize_key",
    "resolve",
    "all_keys",
]
