"""Database module for the graph registry."""

from graph_registry.db.database import async_session_maker, engine, init_db
from graph_registry.db.models import Base, GraphData

__all__ = [
    "Base",
    "GraphData",
    "engine",
    "async_session_maker",
    "init_db",
]
