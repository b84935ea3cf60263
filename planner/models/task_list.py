from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from .utils import utcnow

DEFAULT_LIST_ID = 1


class TaskList(SQLModel, table=True):
    __tablename__ = "lists"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    color: str = Field(default="#3b82f6", nullable=False)
    emoji: str = Field(default="📋")
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
