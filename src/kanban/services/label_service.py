"""Label service: project labels and their attachment to tasks."""
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.core.scope import (
    Scope,
    authorize_label,
    authorize_project,
    authorize_task,
    project_id_for_task,
)
from kanban.models import DEFAULT_LABEL_COLOR, Label, TaskLabel


def create_label(
    db: Session,
    scope: Scope,
    project_id: int,
    name: str,
    color: str | None = None,
) -> Label:
    """
    Create a label in a project.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the caller does not own the project
        ValidationError: If the name is blank
    """
    authorize_project(db, project_id, scope.user_id)

    if not name or not name.strip():
        raise ValidationError("name is required")

    label = Label(
        project_id=project_id,
        name=name.strip(),
        color=color or DEFAULT_LABEL_COLOR,
    )
    db.add(label)
    db.commit()
    db.refresh(label)

    return label


def list_labels(db: Session, scope: Scope, project_id: int) -> list[Label]:
    """List a project's labels by name."""
    authorize_project(db, project_id, scope.user_id)

    stmt = select(Label).where(Label.project_id == project_id).order_by(Label.name, Label.id)
    return list(db.execute(stmt).scalars().all())


def delete_label(db: Session, scope: Scope, label_id: int) -> None:
    """Delete a label, detaching it from every task."""
    label = authorize_label(db, label_id, scope.user_id)
    db.delete(label)
    db.commit()


def add_label_to_task(db: Session, scope: Scope, task_id: int, label_id: int) -> None:
    """
    Attach a label to a task. Attaching an already attached label is a no-op.

    Raises:
        NotFoundError: If the task, the label or a chain link is missing
        ForbiddenError: If the caller owns neither chain
        ValidationError: If the label belongs to a different project
    """
    task = authorize_task(db, task_id, scope.user_id)
    label = authorize_label(db, label_id, scope.user_id)

    if label.project_id != project_id_for_task(db, task):
        raise ValidationError("label belongs to a different project")

    if db.get(TaskLabel, (task_id, label_id)) is not None:
        return

    db.add(TaskLabel(task_id=task_id, label_id=label_id))
    # A concurrent attach of the same pair may commit first
    try:
        db.commit()
    except IntegrityError:
        db.rollback()


def remove_label_from_task(db: Session, scope: Scope, task_id: int, label_id: int) -> None:
    """Detach a label from a task. Detaching a label that is not attached is a no-op."""
    authorize_task(db, task_id, scope.user_id)

    db.execute(
        delete(TaskLabel)
        .where(TaskLabel.task_id == task_id, TaskLabel.label_id == label_id)
        .execution_options(synchronize_session=False)
    )
    db.commit()


def list_task_labels(db: Session, scope: Scope, task_id: int) -> list[Label]:
    """List the labels attached to a task, by name."""
    authorize_task(db, task_id, scope.user_id)

    stmt = (
        select(Label)
        .join(TaskLabel, TaskLabel.label_id == Label.id)
        .where(TaskLabel.task_id == task_id)
        .order_by(Label.name, Label.id)
    )
    return list(db.execute(stmt).scalars().all())
