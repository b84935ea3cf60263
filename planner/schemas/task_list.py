from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class TaskListCreate(SQLModel):
    name: str = Field(min_length=1)
    color: str = "#3b82f6"
    emoji: str = "📋"


class TaskListRead(SQLModel):
    id: int
    name: str
    color: str
    emoji: str
    created_at: datetime
    updated_at: datetime


class TaskListUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    emoji: Optional[str] = None


class TaskListUpdateRequest(TaskListUpdate):
    id: int
