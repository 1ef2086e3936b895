"""Label routes."""
from fastapi import APIRouter, status

from kanban.api.deps import CurrentScope, DatabaseSession
from kanban.schemas.label import (
    LabelAttach,
    LabelCreate,
    LabelListResponse,
    LabelResponse,
)
from kanban.services import label_service

router = APIRouter(tags=["labels"])


@router.get("/projects/{project_id}/labels", response_model=LabelListResponse)
def list_labels(project_id: int, scope: CurrentScope, db: DatabaseSession):
    """List a project's labels."""
    return LabelListResponse(data=label_service.list_labels(db, scope, project_id))


@router.post(
    "/projects/{project_id}/labels",
    response_model=LabelResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_label(
    project_id: int, label_data: LabelCreate, scope: CurrentScope, db: DatabaseSession
):
    """Create a label in a project."""
    return label_service.create_label(db, scope, project_id, label_data.name, label_data.color)


@router.delete("/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_label(label_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete a label."""
    label_service.delete_label(db, scope, label_id)


@router.get("/tasks/{task_id}/labels", response_model=LabelListResponse)
def list_task_labels(task_id: int, scope: CurrentScope, db: DatabaseSession):
    """List the labels attached to a task."""
    return LabelListResponse(data=label_service.list_task_labels(db, scope, task_id))


@router.post("/tasks/{task_id}/labels", status_code=status.HTTP_204_NO_CONTENT)
def attach_label(
    task_id: int, attach_data: LabelAttach, scope: CurrentScope, db: DatabaseSession
):
    """Attach a label from the same project to a task."""
    label_service.add_label_to_task(db, scope, task_id, attach_data.label_id)


@router.delete("/tasks/{task_id}/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def detach_label(task_id: int, label_id: int, scope: CurrentScope, db: DatabaseSession):
    """Detach a label from a task."""
    label_service.remove_label_from_task(db, scope, task_id, label_id)
