from .lists import ListService
from .labels import LabelService
from .tasks import TaskService

__all__ = ["ListService", "LabelService", "TaskService"]
