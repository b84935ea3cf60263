# tests/test_lists.py

from __future__ import annotations

from sqlmodel import select

from planner.models import DEFAULT_LIST_ID, TaskList
from planner.schemas.task import TaskCreate
from planner.schemas.task_list import TaskListCreate, TaskListUpdate


def test_default_list_exists_after_init(lists) -> None:
    inbox = lists.get_by_id(DEFAULT_LIST_ID)
    assert inbox is not None
    assert inbox.name == "Inbox"


def test_init_db_does_not_duplicate_default_list(engine, lists) -> None:
    from planner.db.session import init_db

    init_db(engine)
    assert [l.id for l in lists.get_all()] == [DEFAULT_LIST_ID]


def test_create_list(lists) -> None:
    work = lists.create(TaskListCreate(name="Work", color="#3b82f6", emoji="💼"))

    assert work.id is not None
    assert work.name == "Work"
    assert work.color == "#3b82f6"
    assert work.emoji == "💼"


def test_create_list_uses_defaults(lists) -> None:
    personal = lists.create(TaskListCreate(name="Personal"))
    assert personal.color == "#3b82f6"
    assert personal.emoji == "📋"


def test_update_list_properties(lists) -> None:
    personal = lists.create(TaskListCreate(name="Personal"))
    before = personal.updated_at

    updated = lists.update(personal.id, TaskListUpdate(name="Home", color="#10b981", emoji="🏠"))

    assert updated is not None
    assert updated.name == "Home"
    assert updated.color == "#10b981"
    assert updated.emoji == "🏠"
    assert updated.updated_at >= before


def test_update_list_only_touches_given_fields(lists) -> None:
    personal = lists.create(TaskListCreate(name="Personal", color="#111111"))

    updated = lists.update(personal.id, TaskListUpdate(name="Home"))

    assert updated.name == "Home"
    assert updated.color == "#111111"


def test_update_unknown_list_returns_none(lists) -> None:
    assert lists.update(999, TaskListUpdate(name="Nope")) is None


def test_default_list_cannot_be_deleted(lists, session) -> None:
    before = session.exec(select(TaskList)).all()

    assert lists.delete(DEFAULT_LIST_ID) is False
    assert len(session.exec(select(TaskList)).all()) == len(before)


def test_deleting_list_moves_tasks_to_default(lists, tasks) -> None:
    temp = lists.create(TaskListCreate(name="Temp"))
    created = [tasks.create(TaskCreate(name=f"Task {i}", list_id=temp.id)) for i in range(3)]
    assert lists.get_task_count(temp.id) == 3

    assert lists.delete(temp.id) is True

    assert lists.get_by_id(temp.id) is None
    for task in created:
        assert tasks.get_by_id(task.id).list_id == DEFAULT_LIST_ID
    assert lists.get_task_count(DEFAULT_LIST_ID) == 3


def test_delete_unknown_list_returns_false(lists) -> None:
    assert lists.delete(12345) is False


def test_get_all_is_ordered_by_creation(lists) -> None:
    lists.create(TaskListCreate(name="B"))
    lists.create(TaskListCreate(name="A"))

    assert [l.name for l in lists.get_all()] == ["Inbox", "B", "A"]
