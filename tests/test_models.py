"""Tests for the task model and edit-form parsing."""

from datetime import date, time

import pytest

from tui_tasks.models import (
    Priority,
    Task,
    TaskValidationError,
    apply_changes,
    collect_task_changes,
    format_date,
    format_time_range,
    parse_due,
    parse_priority,
    parse_tags,
    parse_time,
)


class TestTask:
    def test_defaults(self):
        task = Task("Pay rent")
        assert task.title == "Pay rent"
        assert task.done is False
        assert task.due is None
        assert task.priority == Priority.MEDIUM
        assert task.tags == []
        assert task.id

    def test_ids_are_unique(self):
        assert Task().id != Task().id

    def test_checkbox(self):
        task = Task("x")
        assert task.checkbox == "[ ]"
        task.done = True
        assert task.checkbox == "[x]"

    def test_is_overdue(self):
        today = date(2024, 3, 20)
        assert Task(due=date(2024, 3, 15)).is_overdue(today)
        assert not Task(due=date(2024, 3, 20)).is_overdue(today)
        assert not Task(due=date(2024, 3, 15), done=True).is_overdue(today)
        assert not Task().is_overdue(today)


class TestFormatting:
    def test_time_range_both(self):
        assert format_time_range(time(9, 0), time(10, 30)) == "09:00–10:30"

    def test_time_range_single(self):
        assert format_time_range(time(9, 0), None) == "09:00"
        assert format_time_range(None, time(17, 5)) == "17:05"

    def test_time_range_none(self):
        assert format_time_range(None, None) == ""

    def test_format_date_presets(self):
        d = date(2024, 3, 5)
        assert format_date(d) == "2024-03-05"
        assert format_date(d, "DD.MM.YYYY") == "05.03.2024"
        assert format_date(None) == ""

    def test_format_date_unknown_preset_is_iso(self):
        assert format_date(date(2024, 3, 5), "nope") == "2024-03-05"


class TestParsing:
    def test_parse_time(self):
        assert parse_time("09:30") == time(9, 30)
        assert parse_time("  ") is None

    @pytest.mark.parametrize("text", ["9:30", "24:00", "noon", "09:60", "0930"])
    def test_parse_time_rejects(self, text):
        with pytest.raises(ValueError):
            parse_time(text)

    def test_parse_due_iso_and_presets(self):
        assert parse_due("2024-03-15") == date(2024, 3, 15)
        assert parse_due("15.03.2024") == date(2024, 3, 15)

    def test_parse_due_garbage_is_none(self):
        assert parse_due("next tuesday") is None
        assert parse_due("") is None

    def test_parse_tags(self):
        assert parse_tags(" home, ,bills,home ") == ["home", "bills"]
        assert parse_tags("") == []

    def test_parse_priority(self):
        assert parse_priority("high") == Priority.HIGH
        assert parse_priority("Low") == Priority.LOW
        assert parse_priority("urgent") == Priority.MEDIUM


class TestCollectTaskChanges:
    def test_full_form(self):
        changes = collect_task_changes(
            title="  Pay rent ",
            due="2024-03-15",
            start="09:00",
            end="10:00",
            priority="High",
            tags="home, bills",
            notes=" monthly ",
            done=True,
        )
        assert changes == {
            "title": "Pay rent",
            "due": date(2024, 3, 15),
            "start_time": time(9, 0),
            "end_time": time(10, 0),
            "priority": Priority.HIGH,
            "tags": ["home", "bills"],
            "notes": "monthly",
            "done": True,
        }

    def test_title_required(self):
        with pytest.raises(TaskValidationError, match="Title is required"):
            collect_task_changes(title="   ")

    def test_bad_start_time(self):
        with pytest.raises(TaskValidationError, match="start time"):
            collect_task_changes(title="x", start="9am")

    def test_bad_end_time(self):
        with pytest.raises(TaskValidationError, match="end time"):
            collect_task_changes(title="x", end="25:00")

    def test_end_before_start(self):
        with pytest.raises(TaskValidationError, match="after start"):
            collect_task_changes(title="x", start="10:00", end="09:00")

    def test_equal_start_and_end_allowed(self):
        changes = collect_task_changes(title="x", start="10:00", end="10:00")
        assert changes["start_time"] == changes["end_time"] == time(10, 0)

    def test_unparseable_due_clears_date(self):
        assert collect_task_changes(title="x", due="someday")["due"] is None

    def test_validation_error_is_value_error(self):
        assert issubclass(TaskValidationError, ValueError)

    def test_apply_changes(self):
        task = Task("old", due=date(2024, 1, 1))
        apply_changes(task, collect_task_changes(title="new"))
        assert task.title == "new"
        assert task.due is None
