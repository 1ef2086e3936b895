"""Database models."""
from kanban.models.board import Board, Column
from kanban.models.comment import Comment
from kanban.models.label import DEFAULT_LABEL_COLOR, Label, TaskLabel
from kanban.models.project import Project
from kanban.models.task import Task, TaskPriority
from kanban.models.token import RefreshToken
from kanban.models.user import DEFAULT_ROLE, User

__all__ = [
    "User",
    "DEFAULT_ROLE",
    "RefreshToken",
    "Project",
    "Board",
    "Column",
    "Task",
    "TaskPriority",
    "Label",
    "TaskLabel",
    "DEFAULT_LABEL_COLOR",
    "Comment",
]
