from typing import Optional

from fastapi import Depends
from sqlmodel import Session

from planner.db.session import get_session
from planner.services import LabelService, ListService, TaskService


def get_task_service(session: Session = Depends(get_session)) -> TaskService:
    return TaskService(session)


def get_list_service(session: Session = Depends(get_session)) -> ListService:
    return ListService(session)


def get_label_service(session: Session = Depends(get_session)) -> LabelService:
    return LabelService(session)


def parse_id(raw: str) -> Optional[int]:
    """Query-string ids that are not integers match nothing rather than failing validation."""
    try:
        return int(raw)
    except ValueError:
        return None
