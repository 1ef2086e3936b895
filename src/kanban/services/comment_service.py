"""Comment service. Comments are owned by their author."""
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from kanban.core.errors import ForbiddenError, NotFoundError, ValidationError
from kanban.core.scope import Scope, authorize_task
from kanban.models import Comment


def _require_content(content: str | None) -> str:
    if not content or not content.strip():
        raise ValidationError("content is required")
    return content.strip()


def _get_own_comment(db: Session, scope: Scope, comment_id: int) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    if comment.author_id != scope.user_id:
        raise ForbiddenError("not the author of this comment")
    return comment


def create_comment(db: Session, scope: Scope, task_id: int, content: str) -> Comment:
    """
    Add a comment to a task as the caller.

    Raises:
        NotFoundError: If a link of the task's ownership chain is missing
        ForbiddenError: If the caller does not own the task's project
        ValidationError: If the content is blank
    """
    authorize_task(db, task_id, scope.user_id)

    comment = Comment(
        task_id=task_id,
        author_id=scope.user_id,
        content=_require_content(content),
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    return comment


def list_comments(db: Session, scope: Scope, task_id: int) -> list[Comment]:
    """List a task's comments, oldest first."""
    authorize_task(db, task_id, scope.user_id)

    stmt = (
        select(Comment)
        .where(Comment.task_id == task_id)
        .order_by(Comment.inserted_at, Comment.id)
    )
    return list(db.execute(stmt).scalars().all())


def update_comment(db: Session, scope: Scope, comment_id: int, content: str) -> Comment:
    """
    Edit a comment's content.

    Raises:
        NotFoundError: If the comment does not exist
        ForbiddenError: If the caller is not the author
        ValidationError: If the content is blank
    """
    comment = _get_own_comment(db, scope, comment_id)

    comment.content = _require_content(content)
    comment.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(comment)

    return comment


def delete_comment(db: Session, scope: Scope, comment_id: int) -> None:
    """
    Delete a comment.

    Raises:
        NotFoundError: If the comment does not exist
        ForbiddenError: If the caller is not the author
    """
    comment = _get_own_comment(db, scope, comment_id)
    db.delete(comment)
    db.commit()
