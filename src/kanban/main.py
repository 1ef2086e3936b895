"""Main FastAPI application."""

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from kanban.api.routes import auth, boards, comments, labels, projects, tasks
from kanban.config import get_settings
from kanban.core.errors import KanbanError
from kanban.core.logging import setup_logging
from kanban.database import create_tables, init_db
from kanban.telemetry import TelemetryManager

API_PREFIX = "/api/v1"

# Get settings
settings = get_settings()

# Configure logging
setup_logging(settings)
logger = logging.getLogger(__name__)

# Initialize telemetry
telemetry_manager = TelemetryManager(settings)
telemetry_manager.setup()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting {settings.app_name} application")

    # Initialize database
    init_db(settings)
    if settings.auto_create_tables:
        create_tables()
    logger.info("Database initialized")

    yield

    # Shutdown telemetry
    telemetry_manager.shutdown()
    logger.info(f"Shutting down {settings.app_name} application")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Project management backend with boards, columns and ordered tasks",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument FastAPI with OpenTelemetry
if settings.otel_enabled:
    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI instrumented with OpenTelemetry")

# Include routers
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(projects.router, prefix=API_PREFIX)
app.include_router(boards.router, prefix=API_PREFIX)
app.include_router(tasks.router, prefix=API_PREFIX)
app.include_router(comments.router, prefix=API_PREFIX)
app.include_router(labels.router, prefix=API_PREFIX)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.exception_handler(KanbanError)
async def kanban_exception_handler(request: Request, exc: KanbanError):
    """Render domain errors as ``{"detail": ..., "code": ...}``."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation errors, echoing only JSON-safe input."""
    errors = []
    for err in exc.errors():
        clean_err = {
            "type": str(err.get("type", "unknown")),
            "loc": list(err.get("loc", [])),
            "msg": str(err.get("msg", "")),
        }
        if "input" in err:
            try:
                json.dumps(err["input"], allow_nan=False)
                clean_err["input"] = err["input"]
            except (TypeError, ValueError):
                clean_err["input"] = str(err["input"])
        errors.append(clean_err)

    return JSONResponse(
        status_code=422,
        content={"detail": errors, "code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kanban.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
