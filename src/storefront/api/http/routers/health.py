"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.storefront.api.http.app_data import ApplicationDependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness check: returns 200 OK as long as the process is running."""
    return {"status": "healthy", "service": "storefront"}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check.

    Returns 200 when the database answers and both asset directories can be
    written to, 503 otherwise.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    database_config = app_deps.config.database

    checks: dict[str, Any] = {}
    all_healthy = True

    try:
        db_healthy = app_deps.database_service.health_check()
        checks["database"] = {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": "postgresql" if "postgresql" in database_config.url else "sqlite",
        }
        if not db_healthy:
            all_healthy = False
    except Exception as e:
        checks["database"] = {"status": "unhealthy", "error": str(e)}
        all_healthy = False

    storage_config = app_deps.config.storage
    for name, root in (
        ("private_storage", storage_config.private_root),
        ("public_storage", storage_config.public_root),
    ):
        try:
            root.mkdir(parents=True, exist_ok=True)
            checks[name] = {"status": "healthy", "path": root.as_posix()}
        except OSError as e:
            checks[name] = {"status": "unhealthy", "error": str(e)}
            all_healthy = False

    body = {"status": "ready" if all_healthy else "not_ready", "checks": checks}
    if not all_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
