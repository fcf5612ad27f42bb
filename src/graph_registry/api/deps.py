"""FastAPI dependencies."""

from functools import lru_cache

from graph_registry.db.database import async_session_maker
from graph_registry.llm.client import get_completion_client
from graph_registry.service import GraphDataService


@lru_cache
def get_graph_data_service() -> GraphDataService:
    """Return the process-wide service instance."""
    return GraphDataService(async_session_maker, get_completion_client())
