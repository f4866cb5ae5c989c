"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 OK as long as the process is serving requests."""
    return {"status": "healthy", "service": "catalog"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe for the configured store backend.

    Returns 200 when the store can serve requests, 503 otherwise.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    checks: dict[str, dict[str, Any]] = {}
    all_healthy = True

    if app_deps.database_service is not None:
        try:
            db_healthy = app_deps.database_service.health_check()
            checks["database"] = {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": "sqlite" if config.database.is_sqlite else "postgresql",
            }
        except Exception as e:
            logger.warning("Database readiness check failed: {}", e)
            checks["database"] = {"status": "unhealthy", "error": str(e)}
            db_healthy = False
        all_healthy = all_healthy and db_healthy

    if app_deps.memory_store is not None:
        checks["memory_store"] = {
            "status": "healthy",
            "books": len(app_deps.memory_store),
        }

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "store_backend": app_deps.store_backend,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response
