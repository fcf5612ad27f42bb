"""Persistence operations for graph data records."""

import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncSession

from graph_registry.db.models import GraphData, new_record_id

logger = logging.getLogger(__name__)

# Columns overwritten on every save
UPSERT_FIELDS = (
    "chat_id",
    "user_id",
    "selected_provider",
    "endpoint",
    "index_name",
    "description",
)

ON_CONFLICT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}
ON_DUPLICATE_KEY_DIALECTS = ("mysql", "mariadb")


class MalformedIdError(ValueError):
    """Record identifier is not in the store's primary key format."""


def normalize_record_id(record_id: str) -> str:
    """Validate a record id and return it in canonical hex form.

    Raises:
        MalformedIdError: If the id is not a UUID
    """
    try:
        return uuid.UUID(str(record_id)).hex
    except (ValueError, AttributeError, TypeError) as e:
        raise MalformedIdError(f"Malformed record id: {record_id!r}") from e


def build_upsert_statement(dialect: str, fields: dict[str, Any], now: datetime):
    """Build a single-statement insert-or-update keyed on ``chat_id``.

    Args:
        dialect: SQLAlchemy dialect name of the bound engine
        fields: Values for ``UPSERT_FIELDS``
        now: Timestamp for ``created_at`` (insert only) and ``updated_at``

    Raises:
        ArgumentError: If the dialect has no native upsert support here
    """
    values = {"id": new_record_id(), "created_at": now, "updated_at": now, **fields}

    if dialect in ON_CONFLICT_DIALECTS:
        stmt = ON_CONFLICT_DIALECTS[dialect](GraphData).values(**values)
        update_fields = {name: stmt.excluded[name] for name in UPSERT_FIELDS}
        update_fields["updated_at"] = now
        return stmt.on_conflict_do_update(index_elements=["chat_id"], set_=update_fields)

    if dialect in ON_DUPLICATE_KEY_DIALECTS:
        stmt = mysql.insert(GraphData).values(**values)
        update_fields = {name: stmt.inserted[name] for name in UPSERT_FIELDS}
        update_fields["updated_at"] = now
        return stmt.on_duplicate_key_update(**update_fields)

    raise ArgumentError(f"Upsert not supported for dialect '{dialect}'")


class GraphDataRepository:
    """Thin data access layer over the ``graph_data`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_by_chat_id(self, values: dict[str, Any]) -> GraphData:
        """Insert a record or overwrite the one with the same ``chat_id``.

        Runs as one native upsert statement (``ON CONFLICT`` or
        ``ON DUPLICATE KEY``) so concurrent saves for one chat never produce
        duplicates.

        Args:
            values: Column values keyed by the names in ``UPSERT_FIELDS``

        Returns:
            The stored record after the write
        """
        fields = {name: values[name] for name in UPSERT_FIELDS}
        now = datetime.utcnow()

        stmt = build_upsert_statement(self.session.bind.dialect.name, fields, now)
        await self.session.execute(stmt)
        await self.session.commit()

        result = await self.session.execute(
            select(GraphData)
            .where(GraphData.chat_id == fields["chat_id"])
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one()
        logger.debug(f"Upserted graph data {record.id} for chat {record.chat_id}")
        return record

    async def find_all(self) -> list[GraphData]:
        """Return every record in store order."""
        result = await self.session.execute(select(GraphData))
        return list(result.scalars().all())

    async def find_by_id(self, record_id: str) -> GraphData | None:
        """Return the record with the given id, or None if absent.

        Raises:
            MalformedIdError: If the id is not a valid identifier
        """
        return await self.session.get(GraphData, normalize_record_id(record_id))
