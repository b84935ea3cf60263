# This file ensures all models are registered on SQLModel.metadata together
from .task_list import TaskList, DEFAULT_LIST_ID
from .label import Label
from .task import (
    Task,
    TaskLabel,
    TaskStatus,
    TaskPriority,
    RecurringType,
    Reminder,
    Attachment,
    ActivityLog,
    DeletionLog,
)

__all__ = [
    "TaskList",
    "DEFAULT_LIST_ID",
    "Label",
    "Task",
    "TaskLabel",
    "TaskStatus",
    "TaskPriority",
    "RecurringType",
    "Reminder",
    "Attachment",
    "ActivityLog",
    "DeletionLog",
]
