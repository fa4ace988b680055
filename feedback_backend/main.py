"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedback_backend.core.config import settings
from feedback_backend.core.middleware import setup_middleware
from feedback_backend.core.exceptions import FeedbackAppError, InternalError, ValidationError, error_body
from feedback_backend.db.session import build_engine, build_session_factory, check_connection, init_schema
from feedback_backend.schemas.schemas import HealthResponse
from feedback_backend.services.validation import format_errors

from feedback_backend.api.feedbacks import router as feedbacks_router
from feedback_backend.api.logs import router as logs_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("feedback_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s", settings.APP_NAME)
    if check_connection(app.state.engine):
        init_schema(app.state.engine)

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into the ``{success: false, ...}`` envelopes."""

    @app.exception_handler(FeedbackAppError)
    async def app_error_handler(request: Request, exc: FeedbackAppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(format_errors(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error_body(error))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "Database error on %s %s", request.method, request.url.path,
            exc_info=exc,
        )
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content=error_body(error))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods on known paths alike.
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"success": False, "message": "Route not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def create_app(engine: Engine = None) -> FastAPI:
    """Build the application around a database engine.

    Without one, a pooled engine is created from ``DATABASE_URL``.
    """
    if engine is None:
        engine = build_engine()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Feedback management with activity logging and request tracking",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Middleware
    setup_middleware(app)
    register_exception_handlers(app)

    # Register routers
    app.include_router(feedbacks_router, prefix=settings.API_PREFIX)
    app.include_router(logs_router, prefix=settings.API_PREFIX)

    @app.get(f"{settings.API_PREFIX}/health", response_model=HealthResponse)
    async def health():
        """Quick health check endpoint."""
        return HealthResponse(
            message="Feedback Management API is running",
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )

    return app


app = create_app()
