import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import Session, select, func

from ..db.session import transaction
from ..models import Label, TaskLabel
from ..schemas.label import LabelCreate, LabelUpdate

logger = logging.getLogger(__name__)


class LabelService:
    def __init__(self, session: Session):
        self.session = session

    def create(self, data: LabelCreate) -> Label:
        label = Label(name=data.name, color=data.color, icon=data.icon)
        with transaction(self.session):
            self.session.add(label)
        self.session.refresh(label)
        logger.info("Label created id=%s name=%s", label.id, label.name)
        return label

    def update(self, label_id: int, data: LabelUpdate) -> Optional[Label]:
        label = self.session.get(Label, label_id)
        if not label:
            return None

        label_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if label_data:
            for key, value in label_data.items():
                setattr(label, key, value)
            with transaction(self.session):
                self.session.add(label)
            self.session.refresh(label)
        return label

    def delete(self, label_id: int) -> bool:
        # task_labels rows go with it (ON DELETE CASCADE)
        with transaction(self.session):
            result = self.session.exec(delete(Label).where(Label.id == label_id))
        if result.rowcount > 0:
            logger.info("Label deleted id=%s", label_id)
        return result.rowcount > 0

    def get_by_id(self, label_id: int) -> Optional[Label]:
        return self.session.get(Label, label_id)

    def get_by_name(self, name: str) -> Optional[Label]:
        return self.session.exec(select(Label).where(Label.name == name)).first()

    def get_all(self) -> List[Label]:
        return list(self.session.exec(select(Label).order_by(Label.name)).all())

    def get_task_count(self, label_id: int) -> int:
        return self.session.exec(
            select(func.count()).select_from(TaskLabel).where(TaskLabel.label_id == label_id)
        ).one()
