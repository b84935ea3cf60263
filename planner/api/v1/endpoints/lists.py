from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from planner.api.deps import get_list_service, parse_id
from planner.schemas.task_list import TaskListCreate, TaskListRead, TaskListUpdate, TaskListUpdateRequest
from planner.services import ListService

router = APIRouter()


@router.get("", response_model=List[TaskListRead])
def list_lists(service: ListService = Depends(get_list_service)):
    return service.get_all()


@router.get("/{list_id}/count")
def count_list_tasks(list_id: int, service: ListService = Depends(get_list_service)):
    if not service.get_by_id(list_id):
        raise HTTPException(status_code=404, detail="List not found")
    return {"count": service.get_task_count(list_id)}


@router.post("", response_model=TaskListRead, status_code=status.HTTP_201_CREATED)
def create_list(list_create: TaskListCreate, service: ListService = Depends(get_list_service)):
    return service.create(list_create)


@router.put("", response_model=TaskListRead)
def update_list(list_update: TaskListUpdateRequest, service: ListService = Depends(get_list_service)):
    changes = TaskListUpdate.model_validate(list_update.model_dump(exclude={"id"}, exclude_unset=True))
    task_list = service.update(list_update.id, changes)
    if not task_list:
        raise HTTPException(status_code=404, detail="List not found")
    return task_list


@router.delete("")
def delete_list(raw_id: str = Query(..., alias="id"), service: ListService = Depends(get_list_service)):
    # The default list is never removed and reports as not found
    list_id = parse_id(raw_id)
    if list_id is None or not service.delete(list_id):
        raise HTTPException(status_code=404, detail="List not found")
    return {"success": True}
