"""FastAPI application factory.

Every error leaves the API as ``{"error": "<message>"}``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from palette_oms.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidTransition,
    PersistenceError,
    SlotFullError,
    ValidationError,
)
from palette_oms.infrastructure.api.auth import AuthError, ForbiddenError
from palette_oms.infrastructure.api.routes import agenda_router, orders_router
from palette_oms.infrastructure.config import Settings, get_settings
from palette_oms.infrastructure.logging_config import configure_logging
from palette_oms.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from palette_oms.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES: dict[type[DomainException], int] = {
    ValidationError: 400,
    PersistenceError: 400,
    EntityNotFoundError: 404,
    InvalidTransition: 409,
    SlotFullError: 409,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def status_code_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in DOMAIN_STATUS_CODES:
            return DOMAIN_STATUS_CODES[exc_type]
    return 400


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        code = status_code_for(exc)
        logger.info(f"{request.method} {request.url.path} -> {code}: {exc}")
        return _error(code, str(exc))

    @app.exception_handler(AuthError)
    async def auth_exception_handler(request: Request, exc: AuthError):
        return _error(401, str(exc))

    @app.exception_handler(ForbiddenError)
    async def forbidden_exception_handler(request: Request, exc: ForbiddenError):
        return _error(403, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return _error(400, f"{field}: {message}" if field else message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    """Build the API.  Tests pass their own *session_factory*."""
    settings = settings or get_settings()
    engine = None
    if session_factory is None:
        engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application starting up...")
        if engine is not None:
            init_db(engine)
        yield
        logger.info("Application shutting down...")

    app = FastAPI(title="Palette OMS API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.uow_factory = lambda: SqlUnitOfWork(session_factory)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    app.include_router(orders_router)
    app.include_router(agenda_router)
    return app


def create_app_from_env() -> FastAPI:
    """Entry point for ``uvicorn --factory``."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    return create_app(settings)
