"""Tests for TaskListModel: filtering, expansion scoping and refresh."""

from datetime import date

import pytest

from tui_tasks.filters import done_tasks, due_today, open_tasks, overdue
from tui_tasks.models import Task
from tui_tasks.store import InMemoryTaskStore
from tui_tasks.task_list import TaskListModel

TODAY = date(2024, 3, 20)


@pytest.fixture
def store():
    return InMemoryTaskStore(
        [
            Task("Pay rent", id="rent", due=date(2024, 3, 15), notes="landlord"),
            Task("Call mom", id="mom", due=TODAY),
            Task("File taxes", id="tax", done=True),
        ]
    )


def texts(model):
    return [r.text for r in model.rows]


def test_initial_rows_and_cursor(store):
    model = TaskListModel(store)
    assert texts(model) == ["[ ] Pay rent", "[ ] Call mom", "[x] File taxes"]
    assert model.selected_task().id == "rent"
    assert model.filter_label == "All"


def test_overdue_then_done_scenario():
    store = InMemoryTaskStore([Task("Pay rent", due=date(2024, 3, 15))])
    model = TaskListModel(store)
    model.set_filter(overdue(TODAY))
    assert texts(model) == ["[ ] Pay rent"]
    assert model.rows[0].is_header

    model.set_filter(done_tasks())
    assert model.rows == []
    assert model.cursor.index is None
    assert model.selected_task() is None


def test_filter_change_clears_expansion(store):
    model = TaskListModel(store)
    model.set_filter(overdue(TODAY))
    model.toggle_expand()
    assert model.expanded == {"rent"}
    assert len(model.rows) > 1

    model.set_filter(due_today(TODAY))
    assert model.expanded == frozenset()

    model.set_filter(overdue(TODAY))
    assert texts(model) == ["[ ] Pay rent"]


def test_set_filter_moves_to_first_header(store):
    model = TaskListModel(store)
    model.move_last()
    model.set_filter(open_tasks())
    assert model.cursor.index == 0


def test_toggle_expand_keeps_cursor_on_header(store):
    model = TaskListModel(store)
    model.toggle_expand()
    assert texts(model)[:3] == ["[ ] Pay rent", "  - Priority: Medium", "  - Notes: landlord"]
    assert model.cursor.index == 0
    model.move_next()
    assert model.selected_task().id == "mom"
    model.move_prev()
    assert model.selected_task().id == "rent"
    model.toggle_expand()
    assert len(model.rows) == 3


def test_expand_and_collapse(store):
    model = TaskListModel(store)
    model.expand()
    model.expand()
    assert model.expanded == {"rent"}
    model.collapse()
    model.collapse()
    assert model.expanded == frozenset()


def test_refresh_keeps_selection_after_insert(store):
    model = TaskListModel(store)
    model.select_task("mom")
    store._tasks.insert(0, Task("New", id="new"))
    model.refresh()
    assert model.selected_task().id == "mom"


def test_refresh_after_delete_clamps(store):
    model = TaskListModel(store)
    model.move_last()
    store.remove("tax")
    model.refresh()
    assert model.selected_task().id == "mom"


def test_refresh_is_idempotent(store):
    model = TaskListModel(store)
    model.move_next()
    model.toggle_expand()
    before = (list(model.rows), model.cursor.index, model.expanded)
    model.refresh()
    model.refresh()
    assert (list(model.rows), model.cursor.index, model.expanded) == before


def test_deleted_task_drops_from_expanded(store):
    model = TaskListModel(store)
    model.toggle_expand()
    store.remove("rent")
    model.refresh()
    assert model.expanded == frozenset()


def test_select_row_on_detail_selects_owner(store):
    model = TaskListModel(store)
    model.toggle_expand()
    model.select_row(2)
    assert model.cursor.index == 0


def test_blank_label_shows_custom(store):
    from tui_tasks.filters import TaskFilter

    model = TaskListModel(store, TaskFilter(lambda t: True, "  "))
    assert model.filter_label == "Custom"


def test_headers(store):
    model = TaskListModel(store)
    model.toggle_expand()
    assert [h.task_id for h in model.headers()] == ["rent", "mom", "tax"]
