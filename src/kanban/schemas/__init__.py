"""Pydantic schemas for request/response validation."""
from kanban.schemas.board import (
    BoardCreate,
    BoardListResponse,
    BoardResponse,
    BoardUpdate,
    ColumnCreate,
    ColumnListResponse,
    ColumnResponse,
    ColumnUpdate,
)
from kanban.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentUpdate,
)
from kanban.schemas.label import LabelAttach, LabelCreate, LabelListResponse, LabelResponse
from kanban.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from kanban.schemas.task import (
    TaskCreate,
    TaskListResponse,
    TaskMove,
    TaskResponse,
    TaskUpdate,
)
from kanban.schemas.user import (
    AuthResponse,
    RefreshRequest,
    TokenPairResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "RefreshRequest",
    "TokenPairResponse",
    "AuthResponse",
    # Project schemas
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectListResponse",
    # Board schemas
    "BoardCreate",
    "BoardUpdate",
    "BoardResponse",
    "BoardListResponse",
    "ColumnCreate",
    "ColumnUpdate",
    "ColumnResponse",
    "ColumnListResponse",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskMove",
    "TaskResponse",
    "TaskListResponse",
    # Label schemas
    "LabelCreate",
    "LabelAttach",
    "LabelResponse",
    "LabelListResponse",
    # Comment schemas
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentListResponse",
]
