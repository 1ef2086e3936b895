"""Database setup and session management."""

from collections.abc import Generator
from datetime import datetime
from typing import Any

from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from kanban.config import Settings, get_settings
from kanban.types import UTCDateTime


class Base(DeclarativeBase):
    """Base class for all database models. Every ``Mapped[datetime]`` is stored as UTC."""

    type_annotation_map = {datetime: UTCDateTime()}


# Global engine and session factory
engine: Any = None
SessionLocal: Any = None


def init_db(settings: Settings | None = None) -> None:
    """Initialize database engine and session factory."""
    global engine, SessionLocal

    if settings is None:
        settings = get_settings()

    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.db_echo}
    if settings.database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    engine = create_engine(str(settings.database_url), **engine_kwargs)

    # Instrument SQLAlchemy with OpenTelemetry
    if settings.otel_enabled:
        SQLAlchemyInstrumentor().instrument(
            engine=engine,
            service=settings.otel_service_name,
        )

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session]:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all tables in the database."""
    # Register every mapped class on Base.metadata before create_all
    import kanban.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
