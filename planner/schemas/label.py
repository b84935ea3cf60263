from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class LabelCreate(SQLModel):
    name: str = Field(min_length=1)
    color: str = "#10b981"
    icon: str = "🏷️"


class LabelRead(SQLModel):
    id: int
    name: str
    color: str
    icon: str
    created_at: datetime


class LabelUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None


class LabelUpdateRequest(LabelUpdate):
    id: int
