"""Health check endpoints for the graph registry API."""

from typing import Any

from fastapi import APIRouter, Depends

from graph_registry.api.deps import get_graph_data_service
from graph_registry.db.database import check_db
from graph_registry.service import GraphDataService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check - returns ok if the service is running."""
    return {"status": "ok"}


@router.get("/health/ready")
async def ready(
    service: GraphDataService = Depends(get_graph_data_service),
) -> dict[str, Any]:
    """
    Readiness check - verifies dependent services are available.

    Checks:
    - Database: connection and a trivial query
    - LLM: the completion client the API uses; when configured, its
      model listing is queried (no completion tokens are spent)
    """
    services: dict[str, str] = {}
    all_ok = True

    try:
        await check_db()
        services["database"] = "ok"
    except Exception as e:
        services["database"] = f"error: {type(e).__name__}"
        all_ok = False

    llm = service.llm
    if not await llm.is_available():
        # Details generation is optional; CRUD keeps working without it
        services["llm"] = "warning: no provider configured"
    elif await llm.check_health():
        services["llm"] = f"ok ({llm.provider_name})"
    else:
        services["llm"] = f"error: {llm.provider_name} not reachable"
        all_ok = False

    status = "ready" if all_ok else "degraded"
    return {"status": status, "services": services}
