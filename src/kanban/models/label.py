"""Label models."""
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kanban.database import Base

DEFAULT_LABEL_COLOR = "#6b7280"


class Label(Base):
    """Project-scoped label that can be attached to tasks."""

    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_LABEL_COLOR)
    inserted_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now(), default=lambda: datetime.now(UTC)
    )

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="labels")
    task_links: Mapped[list["TaskLabel"]] = relationship(
        "TaskLabel", back_populates="label", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Label(id={self.id}, name={self.name}, project_id={self.project_id})>"


class TaskLabel(Base):
    """Task/label association. The composite key makes attachment idempotent."""

    __tablename__ = "task_labels"

    task_id: Mapped[int] = mapped_column(
        ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True
    )
    label_id: Mapped[int] = mapped_column(
        ForeignKey("labels.id", ondelete="CASCADE"), primary_key=True
    )

    # Relationships
    task: Mapped["Task"] = relationship("Task", back_populates="label_links")
    label: Mapped["Label"] = relationship("Label", back_populates="task_links")

    def __repr__(self) -> str:
        return f"<TaskLabel(task_id={self.task_id}, label_id={self.label_id})>"
