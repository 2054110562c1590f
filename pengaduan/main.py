"""FastAPI application entrypoint. No business logic; only wiring, error mapping and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pengaduan import __version__
from pengaduan.api import router as api_router
from pengaduan.core.config import Settings, get_settings
from pengaduan.core.database import Database
from pengaduan.core.errors import AppError, InternalError, UnauthenticatedError
from pengaduan.core.security import PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict[str, object]:
    return {"success": False, "error": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body."
    first = errors[0]
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(_describe_validation_error(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "Endpoint not found."
    else:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "Database error while handling request",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=500, content=_error_body(InternalError.default_message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error while handling request",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=500, content=_error_body(InternalError.default_message))


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the application.

    The database handle is injected; when none is given, the lifespan opens one
    from DATABASE_URL at startup and disposes it at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: Database | None = None
        if getattr(app.state, "database", None) is None:
            owned = Database(settings.DATABASE_URL, echo=settings.DEBUG)
            app.state.database = owned
        logger.info("Pengaduan API started", extra={"environment": settings.APP_ENV})
        try:
            yield
        finally:
            if owned is not None:
                owned.dispose()
                app.state.database = None

    app = FastAPI(
        title="Pengaduan API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_codec = TokenCodec(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, object]:
        """Root route; minimal payload for discovery."""
        prefix = settings.API_PREFIX
        return {
            "success": True,
            "message": "Pengaduan API",
            "version": __version__,
            "environment": settings.APP_ENV,
            "endpoints": {
                "auth": f"{prefix}/login, {prefix}/register, {prefix}/profile",
                "complaints": f"{prefix}/complaints, {prefix}/my-complaints",
                "health": f"{prefix}/health",
            },
        }

    return app


configure_logging(get_settings())
app = create_app()
