# 📄 File: plantdaddy/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts PlantDaddy, connects all of its parts together and
# makes sure everything is ready to answer the web and mobile apps.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan (logging, database engine and
# session manager), middleware stack, slowapi rate limiter, router registration and the
# exception handlers that render the standard error envelope.
#
# 🔗 Dependencies:
# - FastAPI framework, slowapi, uvicorn
# - plantdaddy.shared.config.settings
# - plantdaddy.shared.infrastructure.database
# - plantdaddy.api (middleware, v1 router)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (`uvicorn plantdaddy.main:app`)
# - tests (create_application)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from plantdaddy.api.middleware.authentication import AuthenticationMiddleware
from plantdaddy.api.middleware.error_handling import ErrorHandlingMiddleware, error_envelope
from plantdaddy.api.middleware.logging import RequestLoggingMiddleware
from plantdaddy.api.v1.router import api_v1_router
from plantdaddy.shared.config.settings import get_settings
from plantdaddy.shared.core.exceptions import PlantDaddyException
from plantdaddy.shared.core.rate_limiter import limiter
from plantdaddy.shared.infrastructure.database import close_database, init_database
from plantdaddy.shared.infrastructure.database.session import initialize_sessions
from plantdaddy.shared.utils.logging import setup_logging

# Get application settings
settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database engine and session manager on startup and disposes of
    them on shutdown.
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("🌱 PlantDaddy API starting up...")

    try:
        await init_database()
        logger.info("✅ Database connection initialized")

        initialize_sessions()
        logger.info("✅ Session manager initialized")

        logger.info("✅ PlantDaddy API startup complete")
        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info("🔄 PlantDaddy API shutting down...")
        try:
            await close_database()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the ``{"error": {...}}`` envelope."""

    @app.exception_handler(PlantDaddyException)
    async def plantdaddy_exception_handler(request: Request, exc: PlantDaddyException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=error_envelope(
                request,
                "VALIDATION_ERROR",
                "Request validation failed",
                {"validation_errors": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning(f"Rate limit exceeded on {request.url.path}")
        return JSONResponse(
            status_code=429,
            content=error_envelope(
                request,
                "RATE_LIMIT_EXCEEDED",
                "Too many requests, please try again later",
                {"limit": str(exc.detail)},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = "NOT_FOUND" if exc.status_code == 404 else f"HTTP_{exc.status_code}"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, code, str(exc.detail), {"path": request.url.path}),
            headers=getattr(exc, "headers", None),
        )


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG and settings.ENABLE_SWAGGER_UI else None,
        redoc_url="/redoc" if settings.DEBUG and settings.ENABLE_REDOC else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Added innermost first: authentication sees the request id set by logging,
    # error handling wraps both, CORS is outermost
    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.state.limiter = limiter

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix="/api/v1")

    register_exception_handlers(app)

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG and settings.ENABLE_SWAGGER_UI else None,
            "health_check": "/api/v1/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """
    Run the application with uvicorn.

    Used by ``python -m plantdaddy.main`` and the ``plantdaddy`` script entry point.
    """
    uvicorn.run(
        "plantdaddy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
