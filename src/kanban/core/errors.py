"""
Domain-level exceptions raised by the auth core and the services.

These exceptions never import FastAPI. The API layer translates them into
responses through the handler registered in ``kanban.main``, using the
``status_code`` and ``code`` hints carried by each class.
"""

from typing import Any


class KanbanError(Exception):
    """Base class for all expected, typed outcomes of a core operation."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(KanbanError):
    """Malformed or missing input; the client must fix it before retrying."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "validation error"


class ConflictError(KanbanError):
    """A uniqueness constraint was violated (e.g. duplicate email)."""

    status_code = 409
    code = "CONFLICT"
    default_message = "resource already exists"


class NotFoundError(KanbanError):
    """
    An entity, or an intermediate link of an ownership chain, is absent.

    :param entity: Entity name (e.g. ``"Column"``).
    :param key: Identifier that was looked up.
    """

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, key: Any) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class InvalidCredentialsError(KanbanError):
    """Login failed. Deliberately identical for unknown email and wrong password."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "invalid email or password"


class UnauthorizedError(KanbanError):
    """Missing, invalid or expired token, or an unusable refresh secret."""

    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "unauthorized"


class ForbiddenError(KanbanError):
    """Authenticated, but not the owner of the target resource chain."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "forbidden"
