import logging
from datetime import datetime

import pytest

from application.session_controller import SessionController
from application.signals import DetailTab, LogDetailMode, LogFocus, Signal, TaskDetailMode, ViewState
from core import LogFormData, ProjectFormData, StoreError, TaskFormData


def _task_id(controller, title):
    return next(t.id for t in controller.tasks if t.title == title)


def test_initial_state_lists_projects(controller):
    assert controller.state is ViewState.LIST
    assert [p.name for p in controller.projects] == ["Alpha", "Beta"]
    assert controller.selected_project is None
    assert controller.error is None


def test_construction_fails_when_first_list_fails(store):
    store.fail_on.add("list_projects")
    with pytest.raises(StoreError):
        SessionController(store)


@pytest.mark.parametrize("index", [-1, 2])
def test_select_project_out_of_range(controller, index):
    assert controller.select_project(index) is Signal.SHOW_ERROR
    assert controller.error == "invalid project index"
    assert controller.selected_project is None
    assert controller.state is ViewState.LIST


def test_select_project_out_of_range_keeps_previous_selection(controller):
    controller.select_project(0)
    before = controller.selected_project
    assert controller.select_project(len(controller.projects)) is Signal.SHOW_ERROR
    assert controller.selected_project == before


def test_select_project_loads_cache_and_resets_session(controller):
    controller.task_cursor = 3
    controller.show_completed = True
    assert controller.select_project(0) is Signal.NONE
    assert controller.state is ViewState.PROJECT_DETAIL
    assert controller.selected_project.name == "Alpha"
    assert [t.title for t in controller.tasks] == ["A", "B", "C", "D"]
    assert len(controller.logs) == 2
    assert controller.task_cursor == 0
    assert controller.log_cursor == 0
    assert controller.selected_task is None
    assert controller.task_detail_mode is TaskDetailMode.NONE
    assert controller.log_detail_mode is LogDetailMode.NONE


def test_select_project_fetch_failure_leaves_state(controller, seeded_store):
    controller.select_project(0)
    seeded_store.fail_on.add("list_logs_for")
    assert controller.select_project(1) is Signal.SHOW_ERROR
    assert controller.selected_project.name == "Alpha"
    assert len(controller.tasks) == 4
    assert controller.error == "list_logs_for failed"


def test_create_project_scenario(store):
    controller = SessionController(store)
    signal = controller.create_project(ProjectFormData(name="Test Project", status="todo"))
    assert signal is Signal.REFRESH_PROJECT_LIST
    assert controller.state is ViewState.LIST
    assert [p.name for p in store.list_projects()] == ["Test Project"]
    controller.refresh_projects()
    assert len(controller.projects) == 1


def test_create_project_validation_failure(store):
    controller = SessionController(store)
    controller.go_to_create_view()
    assert controller.create_project(ProjectFormData(name="   ")) is Signal.SHOW_ERROR
    assert controller.error == "project name is required"
    assert controller.state is ViewState.CREATE_PROJECT
    assert "create_project" not in store.calls


def test_create_project_rejects_unknown_status(store):
    controller = SessionController(store)
    assert controller.create_project(ProjectFormData(name="x", status="someday")) is Signal.SHOW_ERROR
    assert store.projects == {}


def test_update_project_requires_selection(controller):
    assert controller.update_project(ProjectFormData(name="New")) is Signal.SHOW_ERROR
    assert controller.error == "no project selected"


def test_update_project_refreshes_selected_value(controller):
    controller.select_project(0)
    controller.go_to_update_view()
    signal = controller.update_project(ProjectFormData(name="Alpha 2", summary="s", status="done"))
    assert signal is Signal.REFRESH_PROJECT_LIST
    assert controller.state is ViewState.PROJECT_DETAIL
    assert controller.selected_project.name == "Alpha 2"
    assert controller.selected_project.status == "completed"


def test_delete_active_project_clears_selection_and_cascades(controller, seeded_store):
    controller.select_project(0)
    alpha_id = controller.selected_project.id
    assert controller.delete_project(0) is Signal.REFRESH_PROJECT_LIST
    assert controller.selected_project is None
    assert controller.tasks == [] and controller.logs == []
    assert controller.state is ViewState.LIST
    assert not [t for t in seeded_store.tasks.values() if t.project_id == alpha_id]
    controller.refresh_projects()
    assert [p.name for p in controller.projects] == ["Beta"]


def test_delete_project_store_failure_keeps_state(controller, seeded_store):
    controller.select_project(0)
    seeded_store.fail_on.add("delete_project")
    assert controller.delete_project(0) is Signal.SHOW_ERROR
    assert controller.selected_project.name == "Alpha"
    assert controller.state is ViewState.PROJECT_DETAIL


def test_create_task_requires_project(controller):
    assert controller.create_task(TaskFormData(title="t")) is Signal.SHOW_ERROR
    assert controller.error == "no project selected"


def test_create_task_then_refresh(controller):
    controller.select_project(0)
    controller.go_to_create_task_view()
    assert controller.create_task(TaskFormData(title="E")) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert controller.state is ViewState.PROJECT_DETAIL
    assert controller.refresh_active_project() is Signal.NONE
    assert [t.title for t in controller.task_index().pending] == ["A", "B", "E"]


def test_update_task_keeps_completion(controller):
    controller.select_project(0)
    c_id = _task_id(controller, "C")
    completed_at = next(t for t in controller.tasks if t.id == c_id).completed_at
    assert controller.update_task(c_id, TaskFormData(title="C2", description="d")) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    updated = next(t for t in controller.tasks if t.id == c_id)
    assert updated.title == "C2"
    assert updated.completed_at == completed_at


def test_toggle_twice_restores_partition(controller):
    controller.select_project(0)
    a_id = _task_id(controller, "A")
    first = datetime(2024, 6, 1, 9, 0)
    second = datetime(2024, 6, 2, 9, 0)

    assert controller.toggle_task_completion(a_id, first) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert a_id in [t.id for t in controller.task_index().completed]
    controller.toggle_task_completion(a_id, None)
    assert a_id in [t.id for t in controller.task_index().pending]
    controller.toggle_task_completion(a_id, second)
    task = next(t for t in controller.tasks if t.id == a_id)
    assert task.completed_at == second != first


def test_toggle_unknown_task(controller):
    controller.select_project(0)
    assert controller.toggle_task_completion(999, None) is Signal.SHOW_ERROR
    assert controller.error == "task not found"


def test_toggle_does_not_move_cursor_until_reconciled(controller):
    controller.select_project(0)
    controller.create_task(TaskFormData(title="E"))
    controller.refresh_active_project()
    controller.move_task_cursor(1)
    before = controller.task_index()
    b_id = _task_id(controller, "B")
    controller.toggle_task_completion(b_id, datetime(2024, 1, 1))
    assert controller.task_cursor == 1
    controller.reconcile_task_cursor(before, b_id)
    assert controller.task_cursor == 0


def test_reconcile_respects_follow_flag(seeded_store):
    controller = SessionController(seeded_store, follow_completed=False)
    controller.select_project(0)
    controller.create_task(TaskFormData(title="E"))
    controller.refresh_active_project()
    controller.move_task_cursor(1)
    before = controller.task_index()
    b_id = _task_id(controller, "B")
    controller.toggle_task_completion(b_id, datetime(2024, 1, 1))
    controller.reconcile_task_cursor(before, b_id)
    assert controller.task_cursor == 1
    assert controller.task_at_cursor().title == "E"


def test_delete_selected_task_clears_selection(controller):
    controller.select_project(0)
    assert controller.select_task(0) is Signal.NONE
    selected = controller.selected_task
    assert selected.title == "A"
    assert controller.delete_task(selected.id) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert controller.selected_task is None
    assert controller.selected_task_id is None
    assert controller.task_detail_mode is TaskDetailMode.NONE
    assert [t.title for t in controller.tasks] == ["B", "C", "D"]


def test_delete_task_failure_keeps_selection(controller, seeded_store):
    controller.select_project(0)
    controller.select_task(1)
    seeded_store.fail_on.add("delete_task")
    assert controller.delete_task(controller.selected_task_id) is Signal.SHOW_ERROR
    assert controller.selected_task.title == "B"


def test_select_task_respects_visibility(controller):
    controller.select_project(0)
    assert controller.select_task(2) is Signal.SHOW_ERROR
    assert controller.error == "invalid task index"
    controller.toggle_show_completed()
    assert controller.select_task(2) is Signal.NONE
    assert controller.selected_task.title == "C"
    assert controller.task_detail_mode is TaskDetailMode.READONLY


def test_hiding_completed_clamps_cursor(controller):
    controller.select_project(0)
    controller.toggle_show_completed()
    controller.move_task_cursor(10)
    assert controller.task_cursor == 3
    controller.toggle_show_completed()
    assert controller.task_cursor == 1


def test_move_in_readonly_follows_selection(controller):
    controller.select_project(0)
    controller.open_task_detail()
    controller.move_task_cursor(1)
    assert controller.selected_task.title == "B"


def test_edit_and_close_task_detail(controller):
    controller.select_project(0)
    assert controller.edit_task_detail() is Signal.NONE
    assert controller.task_detail_mode is TaskDetailMode.EDIT
    controller.cancel_task_edit()
    assert controller.task_detail_mode is TaskDetailMode.READONLY
    controller.close_task_detail()
    assert controller.task_detail_mode is TaskDetailMode.NONE
    assert controller.selected_task is None


def test_set_tab_resets_detail_modes(controller):
    controller.select_project(0)
    controller.set_tab(DetailTab.TASKS)
    controller.open_task_detail()
    controller.next_tab()
    assert controller.active_tab is DetailTab.LOGS
    assert controller.task_detail_mode is TaskDetailMode.NONE
    assert controller.selected_task is None
    controller.next_tab()
    assert controller.active_tab is DetailTab.PROJECT
    controller.previous_tab()
    assert controller.active_tab is DetailTab.LOGS


def test_log_selection_and_focus(controller):
    controller.select_project(0)
    assert controller.select_log(5) is Signal.SHOW_ERROR
    assert controller.error == "invalid log index"
    controller.switch_log_focus()
    assert controller.log_focus is LogFocus.LIST
    assert controller.open_log_detail() is Signal.NONE
    assert controller.selected_log.title == "kickoff"
    controller.switch_log_focus()
    assert controller.log_focus is LogFocus.PAGER
    controller.close_log_detail()
    assert controller.selected_log is None
    assert controller.log_focus is LogFocus.LIST


def test_update_log_requires_selection(controller):
    controller.select_project(0)
    assert controller.update_log(LogFormData(title="x")) is Signal.SHOW_ERROR
    assert controller.error == "no log selected"
    assert controller.go_to_update_log_view() is Signal.SHOW_ERROR


def test_update_log(controller):
    controller.select_project(0)
    controller.select_log(1)
    assert controller.go_to_update_log_view() is Signal.NONE
    assert controller.state is ViewState.UPDATE_LOG
    assert controller.update_log(LogFormData(title="titled", description="body")) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert controller.state is ViewState.PROJECT_DETAIL
    assert controller.selected_log.title == "titled"


def test_create_and_delete_log(controller):
    controller.select_project(0)
    assert controller.create_log(LogFormData(description="only body")) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    controller.refresh_active_project()
    assert len(controller.logs) == 3
    controller.select_log(2)
    log_id = controller.selected_log_id
    assert controller.delete_log(log_id) is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert controller.selected_log is None
    assert controller.log_detail_mode is LogDetailMode.NONE
    assert len(controller.logs) == 2
    assert controller.log_cursor == 1


def test_transitions_require_project(controller):
    for go in (
        controller.go_to_project_view,
        controller.go_to_update_view,
        controller.go_to_create_task_view,
        controller.go_to_create_log_view,
        controller.go_to_fullscreen_log_editor,
    ):
        assert go() is Signal.SHOW_ERROR
        assert controller.state is ViewState.LIST


def test_abort_form_returns_to_tab(controller):
    controller.select_project(0)
    controller.go_to_create_log_view()
    controller.abort_form()
    assert controller.state is ViewState.PROJECT_DETAIL
    assert controller.active_tab is DetailTab.LOGS
    controller.go_to_list_view()
    controller.go_to_create_view()
    controller.abort_form()
    assert controller.state is ViewState.LIST


def test_project_dialog_left_escape_keeps_projects(controller, seeded_store):
    assert controller.go_to_delete_view(0) is Signal.NONE
    assert controller.state is ViewState.DELETE_PROJECT_CONFIRM
    controller.handle_dialog_key("left")
    assert controller.handle_dialog_key("escape") is Signal.NONE
    assert controller.state is ViewState.LIST
    assert "delete_project" not in seeded_store.calls
    assert len(seeded_store.list_projects()) == 2


def test_project_dialog_confirm_deletes(controller, seeded_store):
    controller.go_to_delete_view(1)
    assert controller.confirm_delete(True) is Signal.REFRESH_PROJECT_LIST
    assert controller.state is ViewState.LIST
    assert [p.name for p in seeded_store.list_projects()] == ["Alpha"]


def test_task_dialog_returns_to_detail(controller):
    controller.select_project(0)
    controller.set_tab(DetailTab.TASKS)
    assert controller.go_to_delete_task_view() is Signal.NONE
    assert controller.state is ViewState.DELETE_TASK_CONFIRM
    assert controller.dialog.subject == "A"
    assert controller.handle_dialog_key("n") is Signal.NONE
    assert controller.state is ViewState.PROJECT_DETAIL

    controller.go_to_delete_task_view()
    assert controller.handle_dialog_key("y") is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert controller.state is ViewState.PROJECT_DETAIL
    assert [t.title for t in controller.tasks] == ["B", "C", "D"]


def test_log_dialog_confirm_via_enter(controller):
    controller.select_project(0)
    controller.go_to_delete_log_view()
    assert controller.state is ViewState.DELETE_LOG_CONFIRM
    controller.handle_dialog_key("right")
    assert controller.handle_dialog_key("enter") is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert [lg.title for lg in controller.logs] == [""]
    assert controller.selected_log is None


def test_refresh_projects_drops_vanished_selection(controller, seeded_store):
    controller.select_project(0)
    seeded_store.delete_project(controller.selected_project.id)
    controller.refresh_projects()
    assert controller.selected_project is None
    assert controller.tasks == []
    assert controller.state is ViewState.LIST


def test_refresh_active_project_drops_dangling_task(controller, seeded_store):
    controller.select_project(0)
    controller.select_task(1)
    seeded_store.delete_task(controller.selected_task_id)
    assert controller.refresh_active_project() is Signal.NONE
    assert controller.selected_task is None
    assert controller.task_detail_mode is TaskDetailMode.NONE
    assert controller.task_cursor == 0


def test_failures_are_logged(controller, caplog):
    with caplog.at_level(logging.WARNING, logger="addae.controller"):
        controller.select_project(7)
    assert "invalid project index" in caplog.text


def test_quit_and_clear_error(controller):
    controller.select_project(-1)
    controller.clear_error()
    assert controller.error is None
    assert controller.quit() is Signal.QUIT


def test_cancelled_log_delete_leaves_no_selection_behind(controller):
    controller.select_project(0)
    controller.set_tab(DetailTab.LOGS)
    controller.go_to_delete_log_view()
    assert controller.dialog.subject == "kickoff"
    controller.handle_dialog_key("escape")
    assert controller.selected_log is None
    assert controller.log_detail_mode is LogDetailMode.NONE

    controller.move_log_cursor(1)
    controller.go_to_delete_log_view()
    assert controller.dialog.subject == ""
    assert controller.handle_dialog_key("y") is Signal.REFRESH_ACTIVE_PROJECT_VIEW
    assert [lg.id for lg in controller.logs] == [7]


def test_open_log_detail_is_the_delete_target(controller):
    controller.select_project(0)
    controller.select_log(1)
    controller.go_to_delete_log_view()
    assert controller.dialog.subject == ""
    controller.handle_dialog_key("y")
    assert [lg.title for lg in controller.logs] == ["kickoff"]


def test_hiding_completed_moves_open_detail_to_cursor(controller):
    controller.select_project(0)
    controller.toggle_show_completed()
    controller.select_task(3)
    assert controller.selected_task.title == "D"

    controller.toggle_show_completed()
    assert controller.task_cursor == 1
    assert controller.selected_task.title == "B"
    assert controller.task_detail_mode is TaskDetailMode.READONLY

    controller.go_to_delete_task_view()
    assert controller.dialog.subject == "B"
    controller.handle_dialog_key("y")
    assert [t.title for t in controller.tasks] == ["A", "C", "D"]


def test_hiding_completed_keeps_visible_detail(controller):
    controller.select_project(0)
    controller.toggle_show_completed()
    controller.select_task(1)
    controller.toggle_show_completed()
    assert controller.selected_task.title == "B"
    assert controller.task_cursor == 1
