"""TUI application: ProjectTrackerTUI class and cmd_tui command."""

import logging
import os
from datetime import datetime
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.document import Document
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Float, FloatContainer, HSplit, Layout, Window
from prompt_toolkit.layout.containers import ConditionalContainer, DynamicContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.widgets import Frame, TextArea

from application.session_controller import SessionController
from application.signals import DetailTab, LogDetailMode, Signal, ViewState
from config import AppConfig

from .cli_commands import open_store
from .i18n import effective_lang, translate
from .tui_forms import FormKind, FormSession, log_form, project_form, submit_form, task_form
from .tui_keymap import all_keys, bindings_for, normalize_key, resolve
from .tui_render import (
    render_detail_view,
    render_dialog,
    render_footer,
    render_form_header,
    render_help,
    render_list_view,
    render_status_text,
)
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("addae.tui")

# Tab to land on after a successful create.
_CREATE_TABS = {
    FormKind.CREATE_TASK: DetailTab.TASKS,
    FormKind.CREATE_LOG: DetailTab.LOGS,
}


class ProjectTrackerTUI:
    """Presentation adapter: routes keys to the controller and reacts to Signals."""

    def __init__(self, controller: SessionController, *, config: Optional[AppConfig] = None, theme: Optional[str] = None):
        self.controller = controller
        self.config = config or AppConfig()
        self.theme = theme or self.config.theme or DEFAULT_THEME
        self.lang = effective_lang(self.config.lang or None)
        self.style = build_style(self.theme)
        self.form: Optional[FormSession] = None
        self.help_visible = False
        self.log_scroll = 0
        self.exit_requested = False
        self.app: Optional[Application] = None
        self.edit_area: Optional[TextArea] = None
        self.main_window: Optional[Window] = None
        self.form_container: Optional[HSplit] = None

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, lang=self.lang, **kwargs)

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    # ------------------------------------------------------------- dispatch

    def current_bindings(self):
        return bindings_for(self.controller, self.form, help_visible=self.help_visible)

    def accepts_key(self, key: str) -> bool:
        return resolve(self.current_bindings(), key) is not None

    def handle_key(self, key: str) -> bool:
        """Dispatch one key; False when nothing in the current state handles it."""
        action = resolve(self.current_bindings(), key)
        if action is None:
            return False
        self.controller.clear_error()
        handler = getattr(self, f"action_{action}")
        if action == "dialog_key":
            handler(normalize_key(key))
        else:
            handler()
        self._invalidate()
        return True

    def react(self, signal: Signal) -> None:
        """Perform the follow-up a controller command asked for."""
        if signal is Signal.REFRESH_PROJECT_LIST:
            self.controller.refresh_projects()
        elif signal is Signal.REFRESH_ACTIVE_PROJECT_VIEW:
            self.controller.refresh_active_project()
        elif signal is Signal.QUIT:
            self.exit_requested = True
            if self.app is not None and self.app.is_running:
                self.app.exit()
        elif signal is Signal.SHOW_ERROR:
            logger.debug("showing error: %s", self.controller.error)

    def _invalidate(self) -> None:
        if self.app is not None and self.app.is_running:
            self.app.invalidate()

    # ---------------------------------------------------------------- forms

    def open_form(self, session: FormSession) -> None:
        self.form = session
        self._load_edit_area()
        if self.app is not None and self.edit_area is not None:
            self.app.layout.focus(self.edit_area)

    def close_form(self) -> None:
        self.form = None
        if self.edit_area is not None:
            self.edit_area.buffer.set_document(Document(""), bypass_readonly=True)
        if self.app is not None and self.main_window is not None:
            self.app.layout.focus(self.main_window)

    def _sync_edit_area(self) -> None:
        if self.form is None or self.edit_area is None:
            return
        self.form.set_value(self.edit_area.text)

    def _load_edit_area(self) -> None:
        if self.form is None or self.edit_area is None:
            return
        value = self.form.active_field.value
        self.edit_area.buffer.set_document(Document(value, len(value)), bypass_readonly=True)

    def action_next_field(self) -> None:
        self._sync_edit_area()
        self.form.focus_next()
        self._load_edit_area()

    def action_previous_field(self) -> None:
        self._sync_edit_area()
        self.form.focus_previous()
        self._load_edit_area()

    def action_choice_next(self) -> None:
        self.form.cycle_choice(1)
        self._load_edit_area()

    def action_choice_previous(self) -> None:
        self.form.cycle_choice(-1)
        self._load_edit_area()

    def action_submit_form(self) -> None:
        self._sync_edit_area()
        session = self.form
        signal = submit_form(session, self.controller)
        if signal is Signal.SHOW_ERROR:
            # keep the form open so the input can be fixed
            return
        self.close_form()
        self.react(signal)
        tab = _CREATE_TABS.get(session.kind)
        if tab is not None and self.controller.active_tab is not tab:
            self.controller.set_tab(tab)

    def action_abort_form(self) -> None:
        session = self.form
        self.close_form()
        if session is not None and session.kind is FormKind.EDIT_TASK:
            self.controller.cancel_task_edit()
        else:
            self.react(self.controller.abort_form())

    # ------------------------------------------------------------- list view

    def action_project_up(self) -> None:
        self.controller.move_project_cursor(-1)

    def action_project_down(self) -> None:
        self.controller.move_project_cursor(1)

    def action_open_project(self) -> None:
        self.react(self.controller.select_project(self.controller.project_cursor))

    def action_new_project(self) -> None:
        self.react(self.controller.go_to_create_view())
        self.open_form(project_form())

    def action_delete_project(self) -> None:
        self.react(self.controller.go_to_delete_view())

    def action_quit(self) -> None:
        self.react(self.controller.quit())

    def action_toggle_help(self) -> None:
        self.help_visible = not self.help_visible

    # ----------------------------------------------------------- detail view

    def action_tab_project(self) -> None:
        self.controller.set_tab(DetailTab.PROJECT)

    def action_tab_tasks(self) -> None:
        self.controller.set_tab(DetailTab.TASKS)

    def action_tab_logs(self) -> None:
        self.controller.set_tab(DetailTab.LOGS)

    def action_next_tab(self) -> None:
        self.controller.next_tab()

    def action_previous_tab(self) -> None:
        self.controller.previous_tab()

    def action_back(self) -> None:
        self.react(self.controller.go_to_list_view())

    def action_edit_project(self) -> None:
        signal = self.controller.go_to_update_view()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(project_form(self.controller.selected_project))

    # ---------------------------------------------------------------- tasks

    def action_task_up(self) -> None:
        self.controller.move_task_cursor(-1)

    def action_task_down(self) -> None:
        self.controller.move_task_cursor(1)

    def action_toggle_task(self) -> None:
        ctrl = self.controller
        task = ctrl.task_at_cursor() or ctrl.selected_task
        if task is None:
            return
        before = ctrl.task_index()
        completed_at = None if task.completed else datetime.now()
        signal = ctrl.toggle_task_completion(task.id, completed_at)
        if signal is not Signal.SHOW_ERROR:
            ctrl.reconcile_task_cursor(before, task.id)
        self.react(signal)

    def action_open_task(self) -> None:
        self.react(self.controller.open_task_detail())

    def action_edit_task(self) -> None:
        signal = self.controller.edit_task_detail()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(task_form(self.controller.selected_task))

    def action_close_task(self) -> None:
        self.controller.close_task_detail()

    def action_new_task(self) -> None:
        signal = self.controller.go_to_create_task_view()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(task_form())

    def action_delete_task(self) -> None:
        self.react(self.controller.go_to_delete_task_view())

    def action_toggle_completed(self) -> None:
        self.controller.toggle_show_completed()

    # ----------------------------------------------------------------- logs

    def action_log_up(self) -> None:
        self.controller.move_log_cursor(-1)
        self.log_scroll = 0

    def action_log_down(self) -> None:
        self.controller.move_log_cursor(1)
        self.log_scroll = 0

    def action_pager_up(self) -> None:
        self.log_scroll = max(0, self.log_scroll - 1)

    def action_pager_down(self) -> None:
        self.log_scroll += 1

    def action_open_log(self) -> None:
        self.log_scroll = 0
        self.react(self.controller.open_log_detail())

    def action_close_log(self) -> None:
        self.controller.close_log_detail()

    def action_switch_log_focus(self) -> None:
        self.controller.switch_log_focus()

    def action_new_log(self) -> None:
        signal = self.controller.go_to_create_log_view()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(log_form())

    def action_fullscreen_log(self) -> None:
        signal = self.controller.go_to_fullscreen_log_editor()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(log_form(fullscreen=True))

    def action_edit_log(self) -> None:
        ctrl = self.controller
        if ctrl.log_detail_mode is not LogDetailMode.READONLY or ctrl.selected_log is None:
            signal = ctrl.select_log(ctrl.log_cursor)
            if signal is Signal.SHOW_ERROR:
                return
        signal = ctrl.go_to_update_log_view()
        if signal is Signal.SHOW_ERROR:
            return
        self.open_form(log_form(ctrl.selected_log))

    def action_delete_log(self) -> None:
        self.react(self.controller.go_to_delete_log_view())

    # --------------------------------------------------------------- dialog

    def action_dialog_key(self, key: str) -> None:
        self.react(self.controller.handle_dialog_key(key))

    # --------------------------------------------------------------- layout

    def _body_text(self) -> FormattedText:
        if self.help_visible:
            return render_help(self)
        state = self.controller.state
        if state in (ViewState.LIST, ViewState.DELETE_PROJECT_CONFIRM):
            return render_list_view(self)
        return render_detail_view(self)

    def _form_header_height(self) -> Dimension:
        if self.form is None:
            return Dimension.exact(0)
        if self.form.fullscreen:
            return Dimension.exact(2)
        return Dimension.exact(len(self.form.fields) + 3)

    def _resolve_body(self):
        if self.form is not None and not self.help_visible:
            return self.form_container
        return self.main_window

    def build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()
        dialog_open = Condition(lambda: self.controller.dialog.is_open)

        @kb.add(Keys.Any, filter=dialog_open)
        def _(event):
            """Modal dialog swallows everything it does not handle."""

        for key in all_keys():
            self._bind(kb, key)
        return kb

    def _bind(self, kb: KeyBindings, key: str) -> None:
        accepts = Condition(lambda: self.accepts_key(key))

        @kb.add(key, eager=(key == "escape"), filter=accepts)
        def _(event):
            self.handle_key(key)

    def build_application(self) -> Application:
        form_choice = Condition(lambda: self.form is not None and self.form.active_field.is_choice)
        self.edit_area = TextArea(multiline=True, wrap_lines=True, read_only=form_choice, scrollbar=True)
        self.main_window = Window(
            content=FormattedTextControl(self._body_text, focusable=True, show_cursor=False),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.form_container = HSplit(
            [
                Window(
                    content=FormattedTextControl(lambda: render_form_header(self)),
                    height=self._form_header_height,
                    always_hide_cursor=True,
                ),
                Frame(self.edit_area),
            ]
        )
        status_bar = Window(content=FormattedTextControl(lambda: render_status_text(self)), height=1, always_hide_cursor=True)
        footer = Window(content=FormattedTextControl(lambda: render_footer(self)), height=1, always_hide_cursor=True)
        dialog = ConditionalContainer(
            Frame(Window(content=FormattedTextControl(lambda: render_dialog(self)), always_hide_cursor=True), style="class:dialog"),
            filter=Condition(lambda: self.controller.dialog.is_open),
        )
        root = FloatContainer(
            content=HSplit([status_bar, DynamicContainer(self._resolve_body), footer]),
            floats=[Float(content=dialog)],
        )
        app = Application(
            layout=Layout(root, focused_element=self.main_window),
            key_bindings=self.build_key_bindings(),
            style=self.style,
            full_screen=True,
        )
        app.ttimeoutlen = 0.05
        return app

    def run(self) -> None:
        self.app = self.build_application()
        self.app.run()


def cmd_tui(args) -> int:
    config: AppConfig = getattr(args, "app_config", None) or AppConfig()
    with open_store(args, config) as store:
        controller = SessionController(
            store,
            show_completed=config.show_completed,
            follow_completed=config.follow_completed,
        )
        tui = ProjectTrackerTUI(controller, config=config, theme=getattr(args, "theme", None))
        tui.run()
    return 0


__all__ = ["ProjectTrackerTUI", "cmd_tui"]
