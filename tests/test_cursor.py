"""Tests for the header-only selection cursor."""

from tui_tasks.cursor import SelectionCursor
from tui_tasks.rows import DisplayRow, RowKind


def header(task_id):
    return DisplayRow(task_id, RowKind.HEADER, f"[ ] {task_id}")


def detail(task_id, text="  - Notes: x"):
    return DisplayRow(task_id, RowKind.DETAIL, text)


# a (expanded with 2 details), b, c (expanded with 1 detail)
ROWS = [header("a"), detail("a"), detail("a"), header("b"), header("c"), detail("c")]


def test_starts_on_first_header():
    cursor = SelectionCursor(ROWS)
    assert cursor.index == 0
    assert cursor.task_id == "a"


def test_empty_rows_select_nothing():
    cursor = SelectionCursor()
    assert cursor.index is None
    assert cursor.current is None
    assert cursor.task_id is None
    cursor.move_to_adjacent_header(1)
    assert cursor.index is None


def test_next_skips_details():
    cursor = SelectionCursor(ROWS)
    cursor.move_to_adjacent_header(1)
    assert cursor.index == 3
    cursor.move_to_adjacent_header(1)
    assert cursor.index == 4


def test_no_wrap_at_ends():
    cursor = SelectionCursor(ROWS)
    cursor.move_to_adjacent_header(-1)
    assert cursor.index == 0
    cursor.move_to_last_header()
    assert cursor.index == 4
    cursor.move_to_adjacent_header(1)
    assert cursor.index == 4


def test_prev_skips_details():
    cursor = SelectionCursor(ROWS)
    cursor.move_to_last_header()
    cursor.move_to_adjacent_header(-1)
    cursor.move_to_adjacent_header(-1)
    assert cursor.index == 0


def test_select_row_snaps_to_owning_header():
    cursor = SelectionCursor(ROWS)
    cursor.select_row(2)
    assert cursor.index == 0
    cursor.select_row(5)
    assert cursor.index == 4


def test_select_row_clamps():
    cursor = SelectionCursor(ROWS)
    cursor.select_row(99)
    assert cursor.index == 4
    cursor.select_row(-3)
    assert cursor.index == 0


def test_select_task():
    cursor = SelectionCursor(ROWS)
    assert cursor.select_task("c")
    assert cursor.index == 4
    assert not cursor.select_task("zzz")
    assert cursor.index == 4


def test_reanchor_prefers_previous_task():
    cursor = SelectionCursor(ROWS)
    cursor.select_task("b")
    cursor.reanchor([header("x"), header("b")], "b")
    assert cursor.index == 1


def test_reanchor_clamps_and_snaps_when_task_gone():
    cursor = SelectionCursor(ROWS)
    cursor.select_task("c")
    cursor.reanchor([header("a"), detail("a"), detail("a")], "c")
    assert cursor.index == 0


def test_reanchor_snaps_forward_when_no_header_before():
    cursor = SelectionCursor([header("a")])
    cursor.reanchor([detail("orphan"), header("b")], "a")
    assert cursor.index == 1


def test_reanchor_to_empty():
    cursor = SelectionCursor(ROWS)
    cursor.reanchor([], "a")
    assert cursor.index is None


def test_reanchor_from_empty_takes_first_header():
    cursor = SelectionCursor()
    cursor.reanchor([detail("a"), header("a"), header("b")], None)
    assert cursor.index == 1


def test_always_on_header_after_any_move():
    cursor = SelectionCursor(ROWS)
    for op in (
        lambda: cursor.move_to_adjacent_header(1),
        lambda: cursor.select_row(1),
        lambda: cursor.move_to_last_header(),
        lambda: cursor.select_row(5),
        lambda: cursor.move_to_adjacent_header(-1),
    ):
        op()
        assert cursor.current.is_header
