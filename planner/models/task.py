from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
import datetime as dt
from enum import Enum

from .task_list import DEFAULT_LIST_ID
from .utils import utcnow


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, Enum):
    none = "none"
    low = "low"
    medium = "medium"
    high = "high"


class RecurringType(str, Enum):
    none = "none"
    daily = "daily"
    weekly = "weekly"
    weekdays = "weekdays"
    monthly = "monthly"
    yearly = "yearly"
    custom = "custom"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    list_id: int = Field(default=DEFAULT_LIST_ID, foreign_key="lists.id", index=True, nullable=False)

    # Calendar day only; deadline carries a time of day
    date: Optional[dt.date] = Field(default=None, index=True)
    deadline: Optional[datetime] = Field(default=None, sa_type=DateTime)

    estimate_minutes: Optional[int] = Field(default=None)
    actual_minutes: Optional[int] = Field(default=None)
    priority: TaskPriority = Field(default=TaskPriority.none)
    status: TaskStatus = Field(default=TaskStatus.pending, index=True)

    parent_task_id: Optional[int] = Field(
        default=None, foreign_key="tasks.id", ondelete="CASCADE", index=True
    )
    recurring_type: Optional[RecurringType] = Field(default=None)
    recurring_config: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)


class TaskLabel(SQLModel, table=True):
    __tablename__ = "task_labels"

    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", primary_key=True)
    label_id: int = Field(foreign_key="labels.id", ondelete="CASCADE", primary_key=True, index=True)


class Reminder(SQLModel, table=True):
    __tablename__ = "reminders"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True, nullable=False)
    remind_at: datetime = Field(nullable=False, sa_type=DateTime)
    message: Optional[str] = Field(default=None)
    sent: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class Attachment(SQLModel, table=True):
    __tablename__ = "attachments"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True, nullable=False)
    filename: str = Field(nullable=False)
    file_path: str = Field(nullable=False)
    file_size: Optional[int] = Field(default=None)
    mime_type: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True, nullable=False)
    action: str = Field(nullable=False)
    old_value: Optional[str] = Field(default=None)
    new_value: Optional[str] = Field(default=None)
    changed_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class DeletionLog(SQLModel, table=True):
    """Snapshot of a deleted task.

    Not foreign-keyed to ``tasks`` so the row outlives the task it describes.
    """

    __tablename__ = "deletion_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(index=True, nullable=False)
    action: str = Field(default="deleted", nullable=False)
    old_value: Optional[str] = Field(default=None)
    new_value: Optional[str] = Field(default=None)
    changed_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
