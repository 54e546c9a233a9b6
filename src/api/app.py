from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel
from src.app.errors import STORAGE_FAILURE
from src.logging_config import configure_logging
from .error import ClientError, ServerError
from .middleware.request_id import RequestIdMiddleware
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    # Driver messages can carry SQL and schema details: log them, never return them
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error_dict = {"code": STORAGE_FAILURE, "message": "Internal server error"}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield
    await engine.dispose()


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL, ApplicationConfig.LOG_FORMAT)

    app = FastAPI(
        title="Document Service",
        version="0.1.0",
        lifespan=lifespan if ApplicationConfig.DB_CREATE_TABLES else None,
    )

    # Last added is outermost: CORS wraps the request-id middleware
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import audit, auth, documents, health_check, permissions, roles, user

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(documents.router, prefix=prefix, tags=["Documents"])
    app.include_router(user.router, prefix=prefix, tags=["User"])
    app.include_router(roles.router, prefix=prefix, tags=["Roles"])
    app.include_router(permissions.router, prefix=prefix, tags=["Permissions"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    return app
