"""
FastAPI Application Entry Point

Key Concepts:
=============

1. Application Factory Pattern
   - create_app(settings) returns a configured app
   - Engine, session factory, password hasher and token provider are built
     from the settings passed in and stored on app.state
   - Tests build their own app with their own settings

2. Lifespan Events
   - startup: log configuration
   - shutdown: dispose of the connection pool

3. Exception Handlers
   - Domain errors → their HTTP status with {"error": "..."}
   - Malformed bodies and path parameters → 400
   - Database errors → 500 without internal detail

Run with:
    uvicorn bookstore.main:create_app --factory --port 8080
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bookstore import __version__
from bookstore.config import Settings, get_settings
from bookstore.database import build_engine, build_session_factory
from bookstore.dependencies import require_bearer_token
from bookstore.exceptions import AppError, AuthError
from bookstore.routers import auth_router, books_router, users_router
from bookstore.services import JWTTokenProvider, PasswordHasher

logger = logging.getLogger(__name__)

API_PREFIX = "/v1"
PROTECTED_PREFIX = f"{API_PREFIX}/auth"


def _format_validation_errors(errors) -> str:
    """Collapse pydantic error entries into one short message."""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "invalid request"


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app.name}...")
    logger.info(f"Debug mode: {settings.app.debug}")
    logger.info(f"Database backend: {app.state.engine.url.get_backend_name()}")

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app.name}...")
    app.state.engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to get_settings()

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.app.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.app.name,
        description="""
## Bookstore API

CRUD over books and users with JWT authentication.

### Authentication
1. `POST /v1/register` to create an account
2. `POST /v1/login` to receive a token
3. Send `Authorization: Bearer <token>` to every `/v1/auth/*` endpoint
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------
    engine = build_engine(settings.db, echo=settings.app.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.auth.bcrypt_rounds)
    app.state.token_provider = JWTTokenProvider(
        secret=settings.auth.jwt.secret,
        expires_in=timedelta(minutes=settings.auth.jwt.expire_minutes),
        algorithm=settings.auth.jwt.algorithm,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "HEAD", "PUT", "DELETE"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Map domain errors to their HTTP status."""
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies and path parameters are client errors (400)."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _format_validation_errors(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors, including statement timeouts.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "A database error occurred. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In debug mode the exception text is returned.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        message = str(exc) if settings.app.debug else "An internal error occurred."
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": message},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # /v1/register and /v1/login are public; everything under /v1/auth goes
    # through the bearer-token gate exactly once.
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(
        books_router,
        prefix=PROTECTED_PREFIX,
        dependencies=[Depends(require_bearer_token)],
    )
    app.include_router(
        users_router,
        prefix=PROTECTED_PREFIX,
        dependencies=[Depends(require_bearer_token)],
    )

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and the database is reachable.",
    )
    def health_check() -> dict:
        """
        Health check endpoint for load balancers and monitoring.

        Reports "degraded" instead of failing when the database is down.
        """
        database_ok = True
        try:
            with app.state.session_factory() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning(f"Health check database probe failed: {e}")
            database_ok = False

        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app.name,
            "version": __version__,
            "database": {"connected": database_ok},
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app.name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Development Server
# =============================================================================
# python -m bookstore.main
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookstore.main:create_app",
        factory=True,
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.debug,
    )
