# tests/test_views.py

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from planner.schemas.task import TaskCreate, TaskUpdate

TODAY = date(2026, 10, 19)


@pytest.fixture()
def dated(tasks) -> dict[str, int]:
    """One task per interesting offset from TODAY, plus an undated one."""
    offsets = {"yesterday": -1, "today": 0, "tomorrow": 1, "day7": 7, "day8": 8}
    created = {
        name: tasks.create(TaskCreate(name=name, date=TODAY + timedelta(days=offset))).id
        for name, offset in offsets.items()
    }
    created["undated"] = tasks.create(TaskCreate(name="undated")).id
    return created


def names(result) -> set[str]:
    return {t.name for t in result}


def test_today_view_matches_date_only(tasks, dated) -> None:
    # A deadline today does not put an otherwise undated task into "today"
    tasks.create(TaskCreate(name="deadline today", deadline=datetime(2026, 10, 19, 17, 0)))

    assert names(tasks.get_tasks_by_view("today", True, today=TODAY)) == {"today"}


def test_next7days_view_is_inclusive(tasks, dated) -> None:
    assert names(tasks.get_tasks_by_view("next7days", True, today=TODAY)) == {"today", "tomorrow", "day7"}


def test_upcoming_view_has_no_upper_bound(tasks, dated) -> None:
    assert names(tasks.get_tasks_by_view("upcoming", True, today=TODAY)) == {"today", "tomorrow", "day7", "day8"}


def test_all_view_returns_everything(tasks, dated) -> None:
    assert names(tasks.get_tasks_by_view("all", True, today=TODAY)) == set(dated)


def test_views_pass_show_completed_through(tasks, dated) -> None:
    tasks.update(dated["today"], TaskUpdate(status="completed"))

    for view in ("today", "next7days", "upcoming", "all"):
        assert "today" in names(tasks.get_tasks_by_view(view, True, today=TODAY))
        assert "today" not in names(tasks.get_tasks_by_view(view, False, today=TODAY))


def test_unknown_view_is_rejected(tasks) -> None:
    with pytest.raises(ValueError):
        tasks.get_tasks_by_view("someday", True, today=TODAY)


def test_view_defaults_to_current_date(tasks) -> None:
    tasks.create(TaskCreate(name="now", date=date.today()))

    assert names(tasks.get_tasks_by_view("today")) == {"now"}


def test_overdue_uses_date_when_no_deadline(tasks, dated) -> None:
    assert names(tasks.get_overdue_tasks(today=TODAY)) == {"yesterday"}


def test_overdue_prefers_deadline_over_date(tasks) -> None:
    # Dated last week but the deadline is still ahead
    tasks.create(
        TaskCreate(name="extended", date=TODAY - timedelta(days=7), deadline=datetime(2026, 10, 25, 9, 0))
    )
    # No date at all, deadline passed
    tasks.create(TaskCreate(name="missed", deadline=datetime(2026, 10, 18, 23, 59)))
    # Deadline later today is not overdue yet
    tasks.create(TaskCreate(name="later today", deadline=datetime(2026, 10, 19, 18, 0)))

    assert names(tasks.get_overdue_tasks(today=TODAY)) == {"missed"}


def test_overdue_excludes_completed_but_keeps_in_progress(tasks) -> None:
    done = tasks.create(TaskCreate(name="done", date=TODAY - timedelta(days=2)))
    busy = tasks.create(TaskCreate(name="busy", date=TODAY - timedelta(days=2)))
    tasks.update(done.id, TaskUpdate(status="completed"))
    tasks.update(busy.id, TaskUpdate(status="in_progress"))

    assert names(tasks.get_overdue_tasks(today=TODAY)) == {"busy"}


def test_overdue_compares_deadline_in_utc(tasks) -> None:
    # 23:30 on the 18th at UTC-5 is already the 19th in UTC
    tasks.create(TaskCreate(name="late evening", deadline="2026-10-18T23:30:00-05:00"))
    tasks.create(TaskCreate(name="early morning", deadline="2026-10-19T01:00:00+03:00"))

    assert names(tasks.get_overdue_tasks(today=TODAY)) == {"early morning"}
