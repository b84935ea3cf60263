from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from planner.api.deps import get_task_service, parse_id
from planner.schemas.task import (
    AttachmentCreate,
    ReminderCreate,
    TaskCreate,
    TaskRead,
    TaskUpdate,
    TaskUpdateRequest,
    TaskView,
)
from planner.services import TaskService

router = APIRouter()


@router.get("", response_model=List[TaskRead])
def list_tasks(
    view: TaskView = TaskView.all,
    show_completed: bool = Query(True, alias="showCompleted"),
    service: TaskService = Depends(get_task_service),
):
    return service.get_tasks_by_view(view, show_completed)


@router.get("/search", response_model=List[TaskRead])
def search_tasks(q: str = Query(..., min_length=1), service: TaskService = Depends(get_task_service)):
    return service.search(q)


@router.get("/overdue", response_model=List[TaskRead])
def list_overdue_tasks(service: TaskService = Depends(get_task_service)):
    return service.get_overdue_tasks()


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    task = service.get_by_id(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(task_create: TaskCreate, service: TaskService = Depends(get_task_service)):
    return service.create(task_create)


@router.put("", response_model=TaskRead)
def update_task(task_update: TaskUpdateRequest, service: TaskService = Depends(get_task_service)):
    # Everything except the id is the partial update; unset fields stay untouched
    changes = TaskUpdate.model_validate(task_update.model_dump(exclude={"id"}, exclude_unset=True))
    task = service.update(task_update.id, changes)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("")
def delete_task(raw_id: str = Query(..., alias="id"), service: TaskService = Depends(get_task_service)):
    task_id = parse_id(raw_id)
    if task_id is None or not service.delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True}


@router.post("/{task_id}/reminders", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def add_reminder(task_id: int, reminder: ReminderCreate, service: TaskService = Depends(get_task_service)):
    task = service.add_reminder(task_id, reminder)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/{task_id}/attachments", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def add_attachment(task_id: int, attachment: AttachmentCreate, service: TaskService = Depends(get_task_service)):
    task = service.add_attachment(task_id, attachment)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task
