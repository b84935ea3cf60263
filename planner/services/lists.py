import logging
from typing import List, Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select, func

from ..db.session import transaction
from ..models import DEFAULT_LIST_ID, Task, TaskList
from ..models.utils import utcnow
from ..schemas.task_list import TaskListCreate, TaskListUpdate

logger = logging.getLogger(__name__)


class ListService:
    def __init__(self, session: Session):
        self.session = session

    def create(self, data: TaskListCreate) -> TaskList:
        task_list = TaskList(name=data.name, color=data.color, emoji=data.emoji)
        with transaction(self.session):
            self.session.add(task_list)
        self.session.refresh(task_list)
        logger.info("List created id=%s name=%s", task_list.id, task_list.name)
        return task_list

    def update(self, list_id: int, data: TaskListUpdate) -> Optional[TaskList]:
        task_list = self.session.get(TaskList, list_id)
        if not task_list:
            return None

        changed = False
        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None or getattr(task_list, key) == value:
                continue
            setattr(task_list, key, value)
            changed = True

        if changed:
            task_list.updated_at = utcnow()
            with transaction(self.session):
                self.session.add(task_list)
            self.session.refresh(task_list)
        return task_list

    def delete(self, list_id: int) -> bool:
        """Delete a list, moving its tasks to the default list first.

        The default list itself is never deleted; ``False`` is returned and
        nothing is touched.
        """
        if list_id == DEFAULT_LIST_ID:
            return False

        with transaction(self.session):
            moved = self.session.exec(
                update(Task).where(Task.list_id == list_id).values(list_id=DEFAULT_LIST_ID)
            )
            result = self.session.exec(delete(TaskList).where(TaskList.id == list_id))

        if result.rowcount > 0:
            logger.info("List deleted id=%s tasks_moved=%s", list_id, moved.rowcount)
        return result.rowcount > 0

    def get_by_id(self, list_id: int) -> Optional[TaskList]:
        return self.session.get(TaskList, list_id)

    def get_all(self) -> List[TaskList]:
        return list(self.session.exec(select(TaskList).order_by(TaskList.created_at, TaskList.id)).all())

    def get_task_count(self, list_id: int) -> int:
        return self.session.exec(select(func.count(Task.id)).where(Task.list_id == list_id)).one()
