"""Graph data API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from graph_registry.api.deps import get_graph_data_service
from graph_registry.schemas import (
    GenerateDetailsRequest,
    GeneratedDetails,
    GraphDataCreate,
    GraphDataRead,
)
from graph_registry.service import GraphDataService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/graph-data", tags=["graph-data"])


@router.post("", response_model=GraphDataRead)
async def save_graph_data(
    body: GraphDataCreate,
    service: GraphDataService = Depends(get_graph_data_service),
) -> Any:
    """Create or overwrite the graph data record for a chat."""
    return await service.save_graph_data(body)


@router.get("", response_model=list[GraphDataRead])
async def list_graph_data(
    service: GraphDataService = Depends(get_graph_data_service),
) -> Any:
    """List all graph data records."""
    return await service.get_all_graph_data()


@router.post("/generate-details", response_model=GeneratedDetails)
async def generate_details(
    body: GenerateDetailsRequest,
    service: GraphDataService = Depends(get_graph_data_service),
) -> Any:
    """Generate a subindex title and description from a chat transcript.

    The model's JSON object is returned as-is.
    """
    logger.info(f"Generating details for {len(body.chat_history)} chars of chat history")
    return await service.generate_details(body.chat_history)


@router.get("/{record_id}", response_model=GraphDataRead | None)
async def get_graph_data(
    record_id: str,
    service: GraphDataService = Depends(get_graph_data_service),
) -> Any:
    """Get one graph data record; returns null when it does not exist."""
    return await service.get_graph_data(record_id)
