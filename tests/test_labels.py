# tests/test_labels.py

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from planner.schemas.label import LabelCreate, LabelUpdate
from planner.schemas.task import TaskCreate


def test_create_label(labels) -> None:
    bug = labels.create(LabelCreate(name="bug", color="#ef4444", icon="🐛"))

    assert bug.id is not None
    assert bug.name == "bug"
    assert bug.color == "#ef4444"
    assert bug.icon == "🐛"


def test_get_by_name(labels) -> None:
    created = labels.create(LabelCreate(name="feature"))

    assert labels.get_by_name("feature").id == created.id
    assert labels.get_by_name("missing") is None


def test_get_all_is_alphabetical(labels) -> None:
    for name in ("zeta", "alpha", "mid"):
        labels.create(LabelCreate(name=name))

    assert [l.name for l in labels.get_all()] == ["alpha", "mid", "zeta"]


def test_update_label(labels) -> None:
    label = labels.create(LabelCreate(name="old", color="#000000"))

    updated = labels.update(label.id, LabelUpdate(name="new"))

    assert updated.name == "new"
    assert updated.color == "#000000"
    assert labels.update(999, LabelUpdate(name="x")) is None


def test_duplicate_label_name_is_rejected_by_store(labels) -> None:
    labels.create(LabelCreate(name="urgent"))

    with pytest.raises(IntegrityError):
        labels.create(LabelCreate(name="urgent"))

    # The failed insert was rolled back; the session is still usable
    assert [l.name for l in labels.get_all()] == ["urgent"]


def test_task_count_and_delete_cascades_associations(labels, tasks) -> None:
    urgent = labels.create(LabelCreate(name="urgent"))
    home = labels.create(LabelCreate(name="home"))
    first = tasks.create(TaskCreate(name="One", label_ids=[urgent.id, home.id]))
    tasks.create(TaskCreate(name="Two", label_ids=[urgent.id]))

    assert labels.get_task_count(urgent.id) == 2
    assert labels.get_task_count(home.id) == 1

    assert labels.delete(urgent.id) is True

    assert labels.get_task_count(urgent.id) == 0
    reloaded = tasks.get_by_id(first.id)
    assert [l.name for l in reloaded.labels] == ["home"]


def test_delete_unknown_label_returns_false(labels) -> None:
    assert labels.delete(4242) is False
