from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from .utils import utcnow


class Label(SQLModel, table=True):
    __tablename__ = "labels"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, nullable=False)
    color: str = Field(default="#10b981", nullable=False)
    icon: str = Field(default="🏷️")
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
