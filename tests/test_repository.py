"""Tests for the graph data repository and model."""

import uuid
from datetime import datetime

import pytest
from sqlalchemy.dialects import mysql, postgresql
from sqlalchemy.exc import ArgumentError

from graph_registry.db.models import GraphData
from graph_registry.db.repository import (
    UPSERT_FIELDS,
    GraphDataRepository,
    MalformedIdError,
    build_upsert_statement,
    normalize_record_id,
)


def _values(**overrides):
    values = {
        "chat_id": "chat-1",
        "user_id": "user-1",
        "selected_provider": "azure-search",
        "endpoint": "https://search.example.com",
        "index_name": "idx",
        "description": "",
    }
    values.update(overrides)
    return values


class TestNormalizeRecordId:
    """Tests for id validation."""

    def test_hex_id_unchanged(self):
        record_id = uuid.uuid4().hex
        assert normalize_record_id(record_id) == record_id

    def test_dashed_id_normalized(self):
        value = uuid.uuid4()
        assert normalize_record_id(str(value)) == value.hex

    @pytest.mark.parametrize("bad_id", ["", "123", "zzzz", "64b7f0c2e1a4d5b6c7d8e9f0"])
    def test_malformed_ids_rejected(self, bad_id):
        with pytest.raises(MalformedIdError):
            normalize_record_id(bad_id)


class TestBuildUpsertStatement:
    """Tests for the per-dialect upsert statement."""

    NOW = datetime(2026, 1, 1, 12, 0, 0)

    def _fields(self):
        return {name: value for name, value in _values().items() if name in UPSERT_FIELDS}

    def test_postgresql_uses_on_conflict(self):
        stmt = build_upsert_statement("postgresql", self._fields(), self.NOW)
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "ON CONFLICT (chat_id) DO UPDATE" in sql

    @pytest.mark.parametrize("dialect", ["mysql", "mariadb"])
    def test_mysql_family_uses_on_duplicate_key(self, dialect):
        stmt = build_upsert_statement(dialect, self._fields(), self.NOW)
        sql = str(stmt.compile(dialect=mysql.dialect()))
        assert "ON DUPLICATE KEY UPDATE" in sql
        assert "created_at = " not in sql.split("ON DUPLICATE KEY UPDATE")[1]

    def test_unsupported_dialect_raises_argument_error(self):
        with pytest.raises(ArgumentError, match="oracle"):
            build_upsert_statement("oracle", self._fields(), self.NOW)


class TestGraphDataRepository:
    """Tests against an in-memory database."""

    @pytest.mark.asyncio
    async def test_upsert_inserts_then_updates(self, session_maker):
        async with session_maker() as session:
            repo = GraphDataRepository(session)
            created = await repo.upsert_by_chat_id(_values())
            updated = await repo.upsert_by_chat_id(_values(index_name="idx-2"))

        assert updated.id == created.id
        assert updated.index_name == "idx-2"

    @pytest.mark.asyncio
    async def test_upsert_ignores_unknown_fields(self, session_maker):
        """Only the six record fields are written."""
        async with session_maker() as session:
            record = await GraphDataRepository(session).upsert_by_chat_id(
                _values(id="forced-id", created_at=None)
            )

        assert record.id != "forced-id"
        assert record.created_at is not None

    @pytest.mark.asyncio
    async def test_find_all_returns_every_record(self, session_maker):
        async with session_maker() as session:
            repo = GraphDataRepository(session)
            for i in range(3):
                await repo.upsert_by_chat_id(_values(chat_id=f"chat-{i}"))
            records = await repo.find_all()

        assert len(records) == 3
        assert all(isinstance(r, GraphData) for r in records)

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, session_maker):
        async with session_maker() as session:
            assert await GraphDataRepository(session).find_by_id(uuid.uuid4().hex) is None


def test_graph_data_repr():
    """Test GraphData string representation."""
    record = GraphData(chat_id="chat-9", index_name="kickoff")
    repr_str = repr(record)
    assert "chat-9" in repr_str
    assert "kickoff" in repr_str
