from fastapi import APIRouter
from .endpoints import labels, lists, tasks

router = APIRouter()

# Include all API endpoints
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(lists.router, prefix="/lists", tags=["lists"])
router.include_router(labels.router, prefix="/labels", tags=["labels"])
