from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List

from planner.api.deps import get_label_service, parse_id
from planner.schemas.label import LabelCreate, LabelRead, LabelUpdate, LabelUpdateRequest
from planner.services import LabelService

router = APIRouter()


@router.get("", response_model=List[LabelRead])
def list_labels(service: LabelService = Depends(get_label_service)):
    return service.get_all()


@router.get("/{label_id}/count")
def count_label_tasks(label_id: int, service: LabelService = Depends(get_label_service)):
    if not service.get_by_id(label_id):
        raise HTTPException(status_code=404, detail="Label not found")
    return {"count": service.get_task_count(label_id)}


@router.post("", response_model=LabelRead, status_code=status.HTTP_201_CREATED)
def create_label(label_create: LabelCreate, service: LabelService = Depends(get_label_service)):
    return service.create(label_create)


@router.put("", response_model=LabelRead)
def update_label(label_update: LabelUpdateRequest, service: LabelService = Depends(get_label_service)):
    changes = LabelUpdate.model_validate(label_update.model_dump(exclude={"id"}, exclude_unset=True))
    label = service.update(label_update.id, changes)
    if not label:
        raise HTTPException(status_code=404, detail="Label not found")
    return label


@router.delete("")
def delete_label(raw_id: str = Query(..., alias="id"), service: LabelService = Depends(get_label_service)):
    label_id = parse_id(raw_id)
    if label_id is None or not service.delete(label_id):
        raise HTTPException(status_code=404, detail="Label not found")
    return {"success": True}
