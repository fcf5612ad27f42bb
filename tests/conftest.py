"""Shared fixtures: in-memory database and mocked completion client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from graph_registry.db.models import Base
from graph_registry.schemas import GraphDataCreate
from graph_registry.service import GraphDataService


@pytest_asyncio.fixture(scope="function")
async def session_maker():
    """Session factory bound to a fresh in-memory SQLite database.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def mock_llm():
    """Completion client whose ``complete`` returns a configurable string."""
    llm = MagicMock()
    llm.provider_name = "openai"
    llm.complete = AsyncMock(return_value="")
    llm.is_available = AsyncMock(return_value=True)
    return llm


@pytest.fixture
def service(session_maker, mock_llm):
    """GraphDataService over the in-memory database."""
    return GraphDataService(session_maker, mock_llm)


@pytest.fixture
def graph_data_input():
    """A valid save payload."""
    return GraphDataCreate(
        chat_id="chat-42",
        user_id="user-7",
        selected_provider="azure-search",
        endpoint="https://search.example.com",
        index_name="kickoff-notes",
        description="Planning discussion for the Q3 project kickoff.",
    )
