from datetime import datetime

import pytest

from application.visual_index import (
    VisualTaskIndex,
    cursor_after_toggle,
    max_navigable_index,
    partition_tasks,
    visual_task_at,
)
from core import Task

DONE = datetime(2024, 5, 1, 12, 0)


def _task(task_id, title, completed=False):
    return Task(id=task_id, project_id=1, title=title, completed_at=DONE if completed else None)


@pytest.fixture
def abcd():
    return [_task(1, "A"), _task(2, "B"), _task(3, "C", True), _task(4, "D", True)]


def test_partition_is_stable():
    tasks = [_task(1, "x", True), _task(2, "a"), _task(3, "y", True), _task(4, "b")]
    pending, completed = partition_tasks(tasks)
    assert [t.title for t in pending] == ["a", "b"]
    assert [t.title for t in completed] == ["x", "y"]


def test_scenario_hidden_completed(abcd):
    assert max_navigable_index(abcd, False) == 1
    assert visual_task_at(abcd, 0, False).title == "A"
    assert visual_task_at(abcd, 2, False) is None


def test_scenario_shown_completed(abcd):
    assert max_navigable_index(abcd, True) == 3
    assert visual_task_at(abcd, 2, True).title == "C"
    assert visual_task_at(abcd, 3, True).title == "D"


@pytest.mark.parametrize("show_completed", [False, True])
def test_visual_task_at_is_injective_and_bounded(abcd, show_completed):
    index = VisualTaskIndex.build(abcd, show_completed)
    top = index.max_navigable_index
    ids = [index.task_at(i).id for i in range(top + 1)]
    assert len(set(ids)) == len(ids)
    for outside in (-2, -1, top + 1, top + 5):
        assert index.task_at(outside) is None


def test_empty_collection_has_no_navigable_index():
    index = VisualTaskIndex.build([], True)
    assert index.max_navigable_index == -1
    assert index.visible_count == 0
    assert index.task_at(0) is None
    assert index.clamp(3) == 0


def test_only_completed_hidden_is_not_navigable():
    index = VisualTaskIndex.build([_task(1, "x", True)], False)
    assert index.max_navigable_index == -1
    assert index.task_at(0) is None


def test_clamp(abcd):
    index = VisualTaskIndex.build(abcd, False)
    assert index.clamp(-4) == 0
    assert index.clamp(1) == 1
    assert index.clamp(9) == 1


def test_index_of_hidden_task_is_none(abcd):
    index = VisualTaskIndex.build(abcd, False)
    assert index.index_of(2) == 1
    assert index.index_of(3) is None


def test_cursor_follows_completed_task_when_hidden():
    before_tasks = [_task(1, "A"), _task(2, "B"), _task(3, "E")]
    before = VisualTaskIndex.build(before_tasks, False)
    after = VisualTaskIndex.build([_task(1, "A"), _task(2, "B", True), _task(3, "E")], False)
    # B sat under the cursor at 1; it disappears, so the cursor steps back to A.
    assert cursor_after_toggle(1, before, after, 2) == 0


def test_cursor_kept_when_task_after_cursor_completes():
    before = VisualTaskIndex.build([_task(1, "A"), _task(2, "B"), _task(3, "E")], False)
    after = VisualTaskIndex.build([_task(1, "A"), _task(2, "B"), _task(3, "E", True)], False)
    assert cursor_after_toggle(0, before, after, 3) == 0


def test_cursor_never_negative_when_first_pending_completes():
    before = VisualTaskIndex.build([_task(1, "A"), _task(2, "B")], False)
    after = VisualTaskIndex.build([_task(1, "A", True), _task(2, "B")], False)
    assert cursor_after_toggle(0, before, after, 1) == 0


def test_follow_disabled_only_clamps():
    before = VisualTaskIndex.build([_task(1, "A"), _task(2, "B"), _task(3, "E")], False)
    after = VisualTaskIndex.build([_task(1, "A"), _task(2, "B", True), _task(3, "E")], False)
    assert cursor_after_toggle(1, before, after, 2, follow_completed=False) == 1
    last = VisualTaskIndex.build([_task(1, "A"), _task(2, "B"), _task(3, "E", True)], False)
    assert cursor_after_toggle(2, before, last, 3, follow_completed=False) == 1


def test_no_follow_when_completed_shown():
    before = VisualTaskIndex.build([_task(1, "A"), _task(2, "B")], True)
    after = VisualTaskIndex.build([_task(1, "A", True), _task(2, "B")], True)
    assert cursor_after_toggle(1, before, after, 1) == 1
