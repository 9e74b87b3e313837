"""Tests for month grid, week strip and day-hour gutter geometry."""

from datetime import date, time, timedelta

import pytest

from tui_tasks.calendar_grid import (
    COLS,
    ROWS,
    CalendarCell,
    DayHourGutter,
    MonthCalendar,
    WeekStrip,
    add_months,
    cell_label,
    day_title,
    monday_of,
    task_counts,
)
from tui_tasks.models import Task
from tui_tasks.store import InMemoryTaskStore

TODAY = date(2024, 3, 20)


def fixed_today():
    return TODAY


@pytest.fixture
def store():
    return InMemoryTaskStore(
        [
            Task("Pay rent", id="rent", due=date(2024, 3, 15)),
            Task("Dentist", id="dentist", due=date(2024, 3, 15)),
            Task("Call mom", id="mom", due=TODAY),
            Task("Someday", id="someday"),
        ]
    )


class TestHelpers:
    def test_monday_of(self):
        assert monday_of(date(2024, 3, 15)) == date(2024, 3, 11)
        assert monday_of(date(2024, 3, 11)) == date(2024, 3, 11)
        assert monday_of(date(2024, 3, 17)) == date(2024, 3, 11)

    def test_add_months_wraps_years(self):
        assert add_months(date(2024, 12, 1), 1) == date(2025, 1, 1)
        assert add_months(date(2024, 1, 1), -1) == date(2023, 12, 1)

    def test_task_counts(self, store):
        counts = task_counts(store)
        assert counts[date(2024, 3, 15)] == 2
        assert counts[TODAY] == 1
        assert len(counts) == 2

    def test_day_title(self):
        assert day_title(date(2024, 3, 15)) == "Friday, 15 Mar 2024"
        assert day_title(None) == "Day"

    def test_cell_label(self):
        cell = CalendarCell(date(2024, 3, 15), 2, is_today=True, is_selected=True)
        assert cell_label(cell).rstrip() == "*[15]  •"
        plain = CalendarCell(date(2024, 3, 5), 0, is_today=False, is_selected=False)
        assert cell_label(plain).rstrip() == "   5"
        assert cell_label(cell, brackets=False).rstrip() == "* 15  •"


class TestMonthCalendar:
    def test_march_2024_grid_start(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        assert cal.cell_date(0, 0) == date(2024, 2, 26)
        assert cal.title == "March 2024"

    def test_grid_is_total(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        dates = [d for row in cal.dates() for d in row]
        assert len(dates) == ROWS * COLS
        assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))
        assert date(2024, 3, 1) in dates
        assert date(2024, 3, 31) in dates

    def test_month_starting_monday(self, store):
        cal = MonthCalendar(store, month=date(2024, 4, 1), today=fixed_today)
        assert cal.cell_date(0, 0) == date(2024, 4, 1)

    def test_build_cells(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), selected=date(2024, 3, 15), today=fixed_today)
        cells = cal.build()
        assert len(cells) == ROWS and all(len(r) == COLS for r in cells)
        r, c = cal.position_of(date(2024, 3, 15))
        assert cells[r][c].task_count == 2
        assert cells[r][c].is_selected
        tr, tc = cal.position_of(TODAY)
        assert cells[tr][tc].is_today
        assert not cells[0][0].in_month

    def test_defaults_to_today(self, store):
        cal = MonthCalendar(store, today=fixed_today)
        assert cal.month == date(2024, 3, 1)
        assert cal.selected == TODAY

    def test_selection_drives_day_list(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        cal.select_date(date(2024, 3, 15))
        assert [r.task_id for r in cal.day_list.rows] == ["rent", "dentist"]
        assert cal.day_title == "Friday, 15 Mar 2024"
        cal.select_date(date(2024, 3, 16))
        assert cal.day_list.rows == []

    def test_select_cell(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        cal.select_cell(2, 4)
        assert cal.selected == date(2024, 3, 15)
        assert cal.selected_position == (2, 4)

    def test_select_cell_out_of_range_ignored(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        cal.select_cell(6, 0)
        assert cal.selected == TODAY

    def test_edge_cell_switches_month(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), today=fixed_today)
        cal.select_cell(0, 0)
        assert cal.month == date(2024, 2, 1)
        assert cal.selected == date(2024, 2, 26)

    def test_move_days_across_month(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), selected=date(2024, 3, 31), today=fixed_today)
        cal.move_days(1)
        assert cal.month == date(2024, 4, 1)
        assert cal.selected == date(2024, 4, 1)
        cal.move_days(-7)
        assert cal.selected == date(2024, 3, 25)

    def test_shift_month_keeps_day(self, store):
        cal = MonthCalendar(store, month=date(2024, 3, 1), selected=date(2024, 3, 15), today=fixed_today)
        cal.next_month()
        assert cal.selected == date(2024, 4, 15)
        cal.prev_month()
        cal.prev_month()
        assert cal.selected == date(2024, 2, 15)

    def test_shift_month_missing_day_falls_back_to_first(self, store):
        cal = MonthCalendar(store, month=date(2024, 1, 1), selected=date(2024, 1, 31), today=fixed_today)
        cal.next_month()
        assert cal.month == date(2024, 2, 1)
        assert cal.selected == date(2024, 2, 1)

    def test_shift_month_missing_day_falls_back_to_today(self, store):
        cal = MonthCalendar(
            store,
            month=date(2024, 3, 1),
            selected=date(2024, 3, 31),
            today=lambda: date(2024, 4, 10),
        )
        cal.next_month()
        assert cal.month == date(2024, 4, 1)
        assert cal.selected == date(2024, 4, 10)

    def test_go_today(self, store):
        cal = MonthCalendar(store, month=date(2023, 7, 1), today=fixed_today)
        cal.go_today()
        assert cal.month == date(2024, 3, 1)
        assert cal.selected == TODAY

    def test_refresh_picks_up_new_tasks(self, store):
        cal = MonthCalendar(store, selected=TODAY, today=fixed_today)
        store.add(Task("Lunch", id="lunch", due=TODAY))
        cal.refresh()
        assert [r.task_id for r in cal.day_list.rows] == ["mom", "lunch"]

    def test_new_task_seeds_due(self, store):
        cal = MonthCalendar(store, selected=date(2024, 3, 15), today=fixed_today)
        assert cal.new_task().due == date(2024, 3, 15)


class TestWeekStrip:
    def test_seed_friday(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 15), today=fixed_today)
        assert week.monday == date(2024, 3, 11)
        assert week.column == 4
        assert week.selected == date(2024, 3, 15)
        assert week.title == "Week of 11 Mar 2024"

    def test_slide_forward(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 15), today=fixed_today)
        week.move_days(3)
        assert week.selected == date(2024, 3, 18)
        assert week.monday == date(2024, 3, 18)
        assert week.column == 0

    def test_slide_backward(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 11), today=fixed_today)
        week.move_days(-1)
        assert week.monday == date(2024, 3, 4)
        assert week.column == 6

    def test_dates_and_build(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 15), today=fixed_today)
        assert week.dates()[0] == date(2024, 3, 11)
        assert week.dates()[-1] == date(2024, 3, 17)
        cells = week.build()
        assert len(cells) == COLS
        assert cells[4].task_count == 2
        assert cells[4].is_selected

    def test_select_column_clamps(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 15), today=fixed_today)
        week.select_column(9)
        assert week.column == 6
        assert week.selected == date(2024, 3, 17)

    def test_day_list_follows(self, store):
        week = WeekStrip(store, seed=date(2024, 3, 15), today=fixed_today)
        assert [r.task_id for r in week.day_list.rows] == ["rent", "dentist"]
        week.go_today()
        assert [r.task_id for r in week.day_list.rows] == ["mom"]


class TestDayHourGutter:
    def test_labels(self):
        labels = DayHourGutter.labels()
        assert len(labels) == 24
        assert labels[0] == "00:00"
        assert labels[-1] == "23:00"

    def test_new_task_at_hour(self):
        task = DayHourGutter(TODAY).new_task(14)
        assert task.due == TODAY
        assert task.start_time == time(14, 0)

    def test_hour_clamped(self):
        gutter = DayHourGutter(TODAY)
        assert gutter.new_task(30).start_time == time(23, 0)
        assert gutter.new_task(-2).start_time == time(0, 0)
