"""Comment routes."""
from fastapi import APIRouter, status

from kanban.api.deps import CurrentScope, DatabaseSession
from kanban.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from kanban.services import comment_service

router = APIRouter(tags=["comments"])


@router.get("/tasks/{task_id}/comments", response_model=CommentListResponse)
def list_comments(task_id: int, scope: CurrentScope, db: DatabaseSession):
    """List a task's comments, oldest first."""
    return CommentListResponse(data=comment_service.list_comments(db, scope, task_id))


@router.post(
    "/tasks/{task_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    task_id: int, comment_data: CommentCreate, scope: CurrentScope, db: DatabaseSession
):
    """Comment on a task."""
    return comment_service.create_comment(db, scope, task_id, comment_data.content)


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: int, comment_data: CommentUpdate, scope: CurrentScope, db: DatabaseSession
):
    """Edit one of your own comments."""
    return comment_service.update_comment(db, scope, comment_id, comment_data.content)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(comment_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete one of your own comments."""
    comment_service.delete_comment(db, scope, comment_id)
