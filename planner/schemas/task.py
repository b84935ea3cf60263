from sqlmodel import SQLModel, Field
from typing import Annotated, List, Optional
from datetime import datetime
import datetime as dt
from enum import Enum

from pydantic import AfterValidator

from ..models.task import TaskStatus, TaskPriority, RecurringType
from ..models.utils import as_utc_naive
from .label import LabelRead
from .task_list import TaskListRead


# Offsets are folded into UTC on the way in; the store keeps naive UTC
UTCDatetime = Annotated[datetime, AfterValidator(as_utc_naive)]


class TaskView(str, Enum):
    today = "today"
    next7days = "next7days"
    upcoming = "upcoming"
    all = "all"


class TaskBase(SQLModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    deadline: Optional[UTCDatetime] = None
    estimate_minutes: Optional[int] = Field(default=None, ge=0)
    priority: TaskPriority = TaskPriority.none
    parent_task_id: Optional[int] = None
    recurring_type: Optional[RecurringType] = None
    recurring_config: Optional[str] = None


class TaskCreate(TaskBase):
    list_id: Optional[int] = None
    label_ids: List[int] = []


class TaskUpdate(SQLModel):
    """Partial update. Only fields present in the payload are applied; an explicit null is a change."""

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    list_id: Optional[int] = None
    date: Optional[dt.date] = None
    deadline: Optional[UTCDatetime] = None
    estimate_minutes: Optional[int] = Field(default=None, ge=0)
    actual_minutes: Optional[int] = Field(default=None, ge=0)
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    parent_task_id: Optional[int] = None
    recurring_type: Optional[RecurringType] = None
    recurring_config: Optional[str] = None
    label_ids: Optional[List[int]] = None


class TaskUpdateRequest(TaskUpdate):
    id: int


class TaskFilters(SQLModel):
    list_id: Optional[int] = None
    label_ids: Optional[List[int]] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    date: Optional[dt.date] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    parent_id: Optional[int] = None
    # Only tasks without a parent; ignored when parent_id is set
    root_only: bool = False
    show_completed: bool = True
    search_query: Optional[str] = None


class ReminderCreate(SQLModel):
    remind_at: UTCDatetime
    message: Optional[str] = None


class ReminderRead(ReminderCreate):
    id: int
    task_id: int
    sent: bool
    created_at: datetime


class AttachmentCreate(SQLModel):
    filename: str = Field(min_length=1)
    file_path: str = Field(min_length=1)
    file_size: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None


class AttachmentRead(AttachmentCreate):
    id: int
    task_id: int
    created_at: datetime


class ActivityLogRead(SQLModel):
    id: int
    task_id: int
    action: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    changed_at: datetime


class TaskSummary(SQLModel):
    """A bare task row, as attached under ``subtasks``."""

    id: int
    name: str
    description: Optional[str] = None
    list_id: int
    date: Optional[dt.date] = None
    deadline: Optional[datetime] = None
    estimate_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    priority: TaskPriority
    status: TaskStatus
    parent_task_id: Optional[int] = None
    recurring_type: Optional[RecurringType] = None
    recurring_config: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None


class TaskRead(TaskSummary):
    """A task with its list, labels, subtasks, reminders, attachments and history attached."""

    list: Optional[TaskListRead] = None
    labels: List[LabelRead] = []
    subtasks: List[TaskSummary] = []
    reminders: List[ReminderRead] = []
    attachments: List[AttachmentRead] = []
    activity_logs: List[ActivityLogRead] = []
