"""Graph data persistence and AI-assisted details generation."""

import json
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from graph_registry.config import settings
from graph_registry.db.models import GraphData
from graph_registry.db.repository import GraphDataRepository, MalformedIdError
from graph_registry.exceptions import (
    STORE_ERRORS,
    ErrorKind,
    GraphDataFetchError,
    GraphDataSaveError,
    InvalidAIResponseError,
    classify_store_error,
)
from graph_registry.llm.client import BaseCompletionClient
from graph_registry.prompts import build_details_messages
from graph_registry.schemas import GraphDataCreate

logger = logging.getLogger(__name__)


class GraphDataService:
    """CRUD over graph data records plus title/description generation.

    Store failures are logged and re-raised as ``GraphDataSaveError`` or
    ``GraphDataFetchError`` with a fixed message; the ``kind`` attribute
    tells callers whether the failure is transient. Completion transport
    errors propagate as the client's ``LLMError`` subclasses.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        llm: BaseCompletionClient,
    ):
        """Initialize the service.

        Args:
            session_maker: Factory for database sessions
            llm: Chat completion client used by ``generate_details``
        """
        self.session_maker = session_maker
        self.llm = llm

    async def save_graph_data(self, data: GraphDataCreate) -> GraphData:
        """Create the record for ``data.chat_id`` or overwrite the existing one."""
        try:
            async with self.session_maker() as session:
                return await GraphDataRepository(session).upsert_by_chat_id(
                    data.model_dump()
                )
        except STORE_ERRORS as e:
            logger.error(f"Error saving Graph Data: {e}", exc_info=True)
            raise GraphDataSaveError(classify_store_error(e)) from e

    async def get_all_graph_data(self) -> list[GraphData]:
        """Return all records in store order."""
        try:
            async with self.session_maker() as session:
                return await GraphDataRepository(session).find_all()
        except STORE_ERRORS as e:
            logger.error(f"Service Error fetching Graph Data: {e}", exc_info=True)
            raise GraphDataFetchError(classify_store_error(e)) from e

    async def get_graph_data(self, record_id: str) -> GraphData | None:
        """Return one record by id, or None if no record has that id.

        Raises:
            GraphDataFetchError: kind ``VALIDATION_FAILED`` for a malformed id,
                ``TRANSIENT``/``PERMANENT`` for store failures
        """
        try:
            async with self.session_maker() as session:
                return await GraphDataRepository(session).find_by_id(record_id)
        except MalformedIdError as e:
            logger.warning(f"Rejected graph data lookup: {e}")
            raise GraphDataFetchError(ErrorKind.VALIDATION_FAILED) from e
        except STORE_ERRORS as e:
            logger.error(f"Service Error fetching Graph Data: {e}", exc_info=True)
            raise GraphDataFetchError(classify_store_error(e)) from e

    async def generate_details(self, chat_history: str) -> dict[str, Any]:
        """Ask the completion API for a subindex title and description.

        Args:
            chat_history: Concatenated chat transcript, sent untruncated

        Returns:
            The parsed JSON object, passed through as returned by the model

        Raises:
            InvalidAIResponseError: If the content is not JSON or lacks
                ``title``/``description``
            LLMError: If the completion request itself fails
        """
        content = await self.llm.complete(
            build_details_messages(chat_history),
            temperature=settings.DETAILS_TEMPERATURE,
            max_tokens=settings.DETAILS_MAX_TOKENS,
        )

        parsed = parse_details(content)
        if parsed is None:
            logger.warning(f"Invalid JSON from AI: {content!r}")
            raise InvalidAIResponseError()
        return parsed


def parse_details(content: str) -> dict[str, Any] | None:
    """Parse completion content into a details object.

    Returns:
        The decoded object if ``title`` and ``description`` are non-empty
        strings, otherwise None
    """
    try:
        parsed = json.loads(content)
    except (ValueError, TypeError, RecursionError):
        # JSONDecodeError is a ValueError; so is the int digit limit
        return None

    if not isinstance(parsed, dict):
        return None
    title = parsed.get("title")
    description = parsed.get("description")
    if isinstance(title, str) and title and isinstance(description, str) and description:
        return parsed
    return None
