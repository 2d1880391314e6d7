"""
Auth API FastAPI Application

Main entry point for the authentication API.
Uses the generic common/ library for infrastructure and auth_api/ for business logic.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.database import MongoDB
from common.utils import error_response, success_response

# App-specific imports
from auth_api.config import AuthConfig, Settings, get_settings
from auth_api.dependencies import init_auth_services, reset_auth_services
from auth_api.routers import auth_router

logger = logging.getLogger(__name__)


# =============================================================================
# Error Handlers
# =============================================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as a flat ``{"message", "code"}`` body."""
    if isinstance(exc.detail, dict):
        content = error_response(
            exc.detail.get("message", "Error"),
            code=exc.detail.get("code"),
            details=exc.detail.get("details"),
        )
    else:
        content = error_response(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors, reported as 400."""
    logger.debug(f"Request validation failed: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response("Invalid request body", code="VALIDATION_ERROR"),
    )


async def catch_unhandled_errors(request: Request, call_next):
    """
    Last resort: never leak internal error text.

    Runs as middleware inside CORS so 500 responses still carry CORS headers.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response("Server error", code="INTERNAL_ERROR"),
        )


# =============================================================================
# Application Factory
# =============================================================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The AuthConfig is derived once here and shared read-only by every request.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    auth_config = AuthConfig.from_settings(settings)
    main_db = MongoDB()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Connects to MongoDB, wires the auth services and ensures indexes.
        """
        logger.info("Starting Auth API...")

        await main_db.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
        )

        users = init_auth_services(main_db.db, auth_config)
        await users.ensure_indexes()
        logger.info("Auth API started successfully!")

        yield

        logger.info("Shutting down Auth API...")
        reset_auth_services()
        await main_db.disconnect()
        logger.info("Auth API shut down complete.")

    app = FastAPI(
        title="Auth API",
        description="Username/password authentication with cookie sessions",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development() else None,
        redoc_url="/redoc" if settings.is_development() else None,
    )
    app.state.settings = settings
    app.state.auth_config = auth_config
    app.state.main_db = main_db

    # Registered first so CORS wraps it.
    app.middleware("http")(catch_unhandled_errors)

    # =========================================================================
    # CORS Middleware (one origin, credentials allowed)
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # =========================================================================
    # Include Routers
    # =========================================================================
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "API is running"

    @app.get("/health", tags=["Health"])
    async def health():
        """
        Health check endpoint.

        Returns the status of the API and database connection.
        """
        return success_response({
            "status": "ok",
            "database": main_db.is_connected,
        })

    return app


app = create_app()


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "api:app",
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.is_development(),
    )
