"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.errors import (
    error_response,
    log_failure,
    register_exception_handlers,
)
from src.catalog.api.http.routers import health
from src.catalog.api.http.routers.memory import book as memory_book
from src.catalog.api.http.routers.service import author, book, category
from src.catalog.api.utils.app_startup import configure_logging
from src.catalog.core.errors import InternalError
from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.core.storage.memory_store import InMemoryBookStore
from src.catalog.runtime.context import get_config

OPENAPI_TAGS = [
    {"name": "Books", "description": "API for managing books"},
    {"name": "Authors", "description": "API for managing authors"},
    {"name": "Categories", "description": "API for managing categories"},
]


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Lifecycle hooks ---
def build_dependencies(store_backend: str) -> ApplicationDependencies:
    """Create the stores required by ``store_backend``."""
    config = get_config()

    if store_backend == "memory":
        store = (
            InMemoryBookStore.seeded()
            if config.catalog.seed_memory_store
            else InMemoryBookStore()
        )
        return ApplicationDependencies(store_backend=store_backend, memory_store=store)

    database_service = DbSessionService()
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()
    return ApplicationDependencies(
        store_backend=store_backend, database_service=database_service
    )


def shutdown(app_dependencies: ApplicationDependencies) -> None:
    logger.info("Shutting down application")
    if app_dependencies.database_service is not None:
        app_dependencies.database_service.dispose()


def create_app(
    dependencies: ApplicationDependencies | None = None,
    store_backend: str | None = None,
) -> FastAPI:
    """Build the catalog application.

    Args:
        dependencies: Pre-built stores. When omitted they are created on
            startup from configuration and released on shutdown.
        store_backend: ``database`` or ``memory``; defaults to the
            configured backend (or the backend of ``dependencies``).
    """
    config = get_config()
    configure_logging()

    backend = store_backend or (
        dependencies.store_backend if dependencies else config.catalog.store_backend
    )
    if backend not in ("database", "memory"):
        raise ValueError(f"Unknown store backend: {backend}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting up application in {} environment with the {} store",
            config.app.environment,
            backend,
        )
        owned = dependencies is None
        if owned:
            app.state.app_dependencies = build_dependencies(backend)
        try:
            yield
        finally:
            if owned:
                shutdown(app.state.app_dependencies)

    app = FastAPI(
        title=config.app.title,
        description="API to manage books, authors, and categories",
        version=config.app.version,
        lifespan=lifespan,
        docs_url=config.app.docs_url,
        redoc_url=None,
        openapi_tags=OPENAPI_TAGS,
    )
    if dependencies is not None:
        app.state.app_dependencies = dependencies

    app.add_middleware(SecurityHeadersMiddleware)

    # --- CORS configuration ---
    if config.app.environment == "production" and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
        expose_headers=config.app.cors.expose_headers,
    )

    # --- Request logging middleware ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        xff = request.headers.get("x-forwarded-for")
        client_ip = (
            xff.split(",")[0].strip()
            if xff
            else request.client.host
            if request.client
            else "unknown"
        )

        base_ctx = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent", "unknown"),
        }

        start = time.perf_counter()

        with logger.contextualize(**base_ctx):
            try:
                logger.info("request.start")
                response = await call_next(request)

                duration_ms = (time.perf_counter() - start) * 1000
                logger.bind(
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 1),
                ).info("request.end")

                response.headers.setdefault("X-Request-ID", request_id)
                return response

            except Exception as exc:
                error = InternalError()
                error.__cause__ = exc
                log_failure(error, request)
                return error_response(error, headers={"X-Request-ID": request_id})

    register_exception_handlers(app)

    # --- Router registration ---
    app.include_router(health.router)
    if backend == "memory":
        app.include_router(memory_book.router)
    else:
        app.include_router(book.router)
        app.include_router(author.router)
        app.include_router(category.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=get_config().app.port,
        access_log=False,  # access logging is handled in middleware
    )
