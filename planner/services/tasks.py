import json
import logging
from collections import defaultdict
from datetime import datetime, timedelta
import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import case, delete, insert, or_
from sqlmodel import Session, select, func, col

from ..core.errors import InvalidTaskError
from ..db.session import transaction
from ..models import (
    DEFAULT_LIST_ID,
    ActivityLog,
    Attachment,
    DeletionLog,
    Label,
    Reminder,
    Task,
    TaskLabel,
    TaskList,
    TaskStatus,
)
from ..models.utils import utcnow
from ..schemas.label import LabelRead
from ..schemas.task import (
    ActivityLogRead,
    AttachmentCreate,
    AttachmentRead,
    ReminderCreate,
    ReminderRead,
    TaskCreate,
    TaskFilters,
    TaskRead,
    TaskSummary,
    TaskUpdate,
    TaskView,
)
from ..schemas.task_list import TaskListRead

logger = logging.getLogger(__name__)

# Columns that may be changed but never cleared
NON_NULLABLE_FIELDS = {"name", "list_id", "priority", "status"}


def _stringify(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _effective_due(task: Task) -> Optional[dt.date]:
    if task.deadline is not None:
        return task.deadline.date()
    return task.date


class TaskService:
    """Task CRUD, filtered views and change history.

    Every task handed back is assembled: its list, labels, subtasks,
    reminders, attachments and activity log are loaded with one query per
    related table for the whole batch, never per task.
    """

    def __init__(self, session: Session):
        self.session = session

    # --- 1. MUTATIONS ---

    def create(self, data: TaskCreate) -> TaskRead:
        task = Task(
            **data.model_dump(exclude={"list_id", "label_ids"}),
            list_id=data.list_id if data.list_id is not None else DEFAULT_LIST_ID,
        )

        with transaction(self.session):
            self.session.add(task)
            self.session.flush()
            task_id = task.id

            self._add_labels(task_id, data.label_ids)
            self._log(task_id, "created", new_value=data.model_dump_json(exclude_unset=True))

        logger.info("Task created id=%s name=%s list_id=%s", task_id, data.name, data.list_id or DEFAULT_LIST_ID)
        return self.get_by_id(task_id)

    def update(self, task_id: int, data: TaskUpdate) -> Optional[TaskRead]:
        """Apply a partial update.

        Every field present in ``data`` is written and logged, an explicit
        ``None`` included; only a re-sent identical ``name`` goes unlogged.
        Returns ``None`` when the task does not exist.
        """
        task = self.session.get(Task, task_id)
        if not task:
            return None

        task_data = data.model_dump(exclude_unset=True)
        label_ids = task_data.pop("label_ids", None)

        for key in NON_NULLABLE_FIELDS:
            if key in task_data and task_data[key] is None:
                raise InvalidTaskError(f"{key} cannot be empty")
        if task_data.get("parent_task_id") == task_id:
            raise InvalidTaskError("A task cannot be its own parent")

        now = utcnow()

        with transaction(self.session):
            for key, value in task_data.items():
                old_value = getattr(task, key)
                if key == "name" and old_value == value:
                    continue
                self._log(task_id, key, old_value=old_value, new_value=value, changed_at=now)

            if "status" in task_data:
                was_completed = task.status == TaskStatus.completed
                if task_data["status"] == TaskStatus.completed and not was_completed:
                    task.completed_at = now
                elif task_data["status"] != TaskStatus.completed and was_completed:
                    task.completed_at = None

            for key, value in task_data.items():
                setattr(task, key, value)

            if label_ids is not None:
                self._replace_labels(task_id, label_ids, now)

            if task_data:
                task.updated_at = now
                self.session.add(task)

        if task_data or label_ids is not None:
            logger.info("Task updated id=%s fields=%s", task_id, sorted(task_data))
        return self.get_by_id(task_id)

    def delete(self, task_id: int) -> bool:
        """Delete a task together with all of its subtasks.

        A snapshot of each removed task is written to ``deletion_logs``
        first, so the audit trail survives the cascade.
        """
        task = self.session.get(Task, task_id)
        if not task:
            return False

        doomed = self._subtree_ids(task_id)
        snapshots = self._assemble(
            self.session.exec(select(Task).where(col(Task.id).in_(doomed))).all()
        )

        with transaction(self.session):
            for snapshot in snapshots:
                self.session.add(
                    DeletionLog(task_id=snapshot.id, action="deleted", old_value=snapshot.model_dump_json())
                )
            self.session.exec(delete(Task).where(col(Task.id).in_(doomed)))

        logger.info("Task deleted id=%s subtasks_removed=%s", task_id, len(doomed) - 1)
        return True

    def add_reminder(self, task_id: int, data: ReminderCreate) -> Optional[TaskRead]:
        if not self.session.get(Task, task_id):
            return None
        with transaction(self.session):
            self.session.add(Reminder(task_id=task_id, remind_at=data.remind_at, message=data.message))
        return self.get_by_id(task_id)

    def add_attachment(self, task_id: int, data: AttachmentCreate) -> Optional[TaskRead]:
        if not self.session.get(Task, task_id):
            return None
        with transaction(self.session):
            self.session.add(Attachment(task_id=task_id, **data.model_dump()))
        return self.get_by_id(task_id)

    # --- 2. QUERIES ---

    def get_by_id(self, task_id: int) -> Optional[TaskRead]:
        task = self.session.get(Task, task_id)
        if not task:
            return None
        return self._assemble([task])[0]

    def get_tasks(self, filters: Optional[TaskFilters] = None) -> List[TaskRead]:
        filters = filters or TaskFilters()
        query = select(Task)

        if filters.list_id is not None:
            query = query.where(Task.list_id == filters.list_id)

        # Any one of the labels is enough
        if filters.label_ids:
            labelled = select(TaskLabel.task_id).where(col(TaskLabel.label_id).in_(filters.label_ids))
            query = query.where(col(Task.id).in_(labelled))

        if filters.priority is not None:
            query = query.where(Task.priority == filters.priority)
        if filters.status is not None:
            query = query.where(Task.status == filters.status)

        if filters.date is not None:
            query = query.where(Task.date == filters.date)
        if filters.start_date is not None:
            query = query.where(col(Task.date) >= filters.start_date)
        if filters.end_date is not None:
            query = query.where(col(Task.date) <= filters.end_date)

        if filters.parent_id is not None:
            query = query.where(Task.parent_task_id == filters.parent_id)
        elif filters.root_only:
            query = query.where(col(Task.parent_task_id).is_(None))

        if not filters.show_completed:
            query = query.where(Task.status != TaskStatus.completed)

        if filters.search_query:
            term = filters.search_query
            query = query.where(
                or_(
                    col(Task.name).icontains(term, autoescape=True),
                    col(Task.description).icontains(term, autoescape=True),
                )
            )

        tasks = self.session.exec(self._ordered(query)).all()
        return self._assemble(tasks)

    def get_tasks_by_view(
        self, view: TaskView, show_completed: bool = True, today: Optional[dt.date] = None
    ) -> List[TaskRead]:
        """Resolve a named date view against ``today`` (the local calendar date by default)."""
        today = today or dt.date.today()
        view = TaskView(view)

        if view == TaskView.today:
            filters = TaskFilters(date=today, show_completed=show_completed)
        elif view == TaskView.next7days:
            filters = TaskFilters(start_date=today, end_date=today + timedelta(days=7), show_completed=show_completed)
        elif view == TaskView.upcoming:
            filters = TaskFilters(start_date=today, show_completed=show_completed)
        else:
            filters = TaskFilters(show_completed=show_completed)

        return self.get_tasks(filters)

    def get_overdue_tasks(self, today: Optional[dt.date] = None) -> List[TaskRead]:
        """Unfinished tasks whose deadline (or date, when there is no deadline) is before today."""
        today = today or dt.date.today()
        start_of_today = datetime.combine(today, dt.time.min)

        # Superset in SQL, exact rule on typed dates below
        query = select(Task).where(
            Task.status != TaskStatus.completed,
            or_(col(Task.date) < today, col(Task.deadline) < start_of_today),
        )
        candidates = self.session.exec(self._ordered(query)).all()
        overdue = [t for t in candidates if _effective_due(t) is not None and _effective_due(t) < today]
        return self._assemble(overdue)

    def search(self, query: str) -> List[TaskRead]:
        return self.get_tasks(TaskFilters(search_query=query))

    # --- 3. HELPERS ---

    @staticmethod
    def _ordered(query):
        # Deadline, else date, ascending with undated tasks last; newest first on ties
        due = func.coalesce(Task.deadline, Task.date)
        return query.order_by(
            case((due.is_(None), 1), else_=0),
            due,
            col(Task.created_at).desc(),
            col(Task.id).desc(),
        )

    def _log(
        self,
        task_id: int,
        action: str,
        old_value: Any = None,
        new_value: Any = None,
        changed_at: Optional[datetime] = None,
    ) -> None:
        self.session.add(
            ActivityLog(
                task_id=task_id,
                action=action,
                old_value=_stringify(old_value),
                new_value=_stringify(new_value),
                changed_at=changed_at or utcnow(),
            )
        )

    def _add_labels(self, task_id: int, label_ids: Sequence[int]) -> None:
        rows = [{"task_id": task_id, "label_id": label_id} for label_id in dict.fromkeys(label_ids)]
        if rows:
            self.session.exec(insert(TaskLabel), params=rows)

    def _replace_labels(self, task_id: int, label_ids: Sequence[int], changed_at: datetime) -> None:
        current = sorted(
            self.session.exec(select(TaskLabel.label_id).where(TaskLabel.task_id == task_id)).all()
        )
        wanted = sorted(set(label_ids))
        if current != wanted:
            self._log(task_id, "label_ids", old_value=current, new_value=wanted, changed_at=changed_at)

        self.session.exec(delete(TaskLabel).where(TaskLabel.task_id == task_id))
        self._add_labels(task_id, label_ids)

    def _subtree_ids(self, task_id: int) -> List[int]:
        ids = [task_id]
        seen = {task_id}
        frontier = [task_id]
        while frontier:
            children = self.session.exec(
                select(Task.id).where(col(Task.parent_task_id).in_(frontier))
            ).all()
            frontier = [child for child in children if child not in seen]
            seen.update(frontier)
            ids.extend(frontier)
        return ids

    def _assemble(self, tasks: Sequence[Task]) -> List[TaskRead]:
        if not tasks:
            return []

        task_ids = [t.id for t in tasks]
        list_ids = {t.list_id for t in tasks}

        lists: Dict[int, TaskList] = {
            l.id: l for l in self.session.exec(select(TaskList).where(col(TaskList.id).in_(list_ids))).all()
        }

        labels = defaultdict(list)
        label_rows = self.session.exec(
            select(TaskLabel.task_id, Label)
            .join(Label, col(Label.id) == col(TaskLabel.label_id))
            .where(col(TaskLabel.task_id).in_(task_ids))
            .order_by(Label.name)
        ).all()
        for owner_id, label in label_rows:
            labels[owner_id].append(LabelRead.model_validate(label))

        subtasks = defaultdict(list)
        for child in self.session.exec(
            select(Task)
            .where(col(Task.parent_task_id).in_(task_ids))
            .order_by(Task.created_at, Task.id)
        ).all():
            subtasks[child.parent_task_id].append(TaskSummary.model_validate(child))

        reminders = defaultdict(list)
        for reminder in self.session.exec(
            select(Reminder)
            .where(col(Reminder.task_id).in_(task_ids))
            .order_by(Reminder.remind_at, Reminder.id)
        ).all():
            reminders[reminder.task_id].append(ReminderRead.model_validate(reminder))

        attachments = defaultdict(list)
        for attachment in self.session.exec(
            select(Attachment)
            .where(col(Attachment.task_id).in_(task_ids))
            .order_by(col(Attachment.created_at).desc(), col(Attachment.id).desc())
        ).all():
            attachments[attachment.task_id].append(AttachmentRead.model_validate(attachment))

        activity = defaultdict(list)
        for entry in self.session.exec(
            select(ActivityLog)
            .where(col(ActivityLog.task_id).in_(task_ids))
            .order_by(col(ActivityLog.changed_at).desc(), col(ActivityLog.id).desc())
        ).all():
            activity[entry.task_id].append(ActivityLogRead.model_validate(entry))

        assembled = []
        for task in tasks:
            task_list = lists.get(task.list_id)
            assembled.append(
                TaskRead.model_validate(
                    task,
                    update={
                        "list": TaskListRead.model_validate(task_list) if task_list else None,
                        "labels": labels[task.id],
                        "subtasks": subtasks[task.id],
                        "reminders": reminders[task.id],
                        "attachments": attachments[task.id],
                        "activity_logs": activity[task.id],
                    },
                )
            )
        return assembled
