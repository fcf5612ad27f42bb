"""SQLAlchemy models for the graph registry."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def new_record_id() -> str:
    """Generate a store-native record identifier."""
    return uuid.uuid4().hex


class GraphData(Base):
    """Metadata describing a chat-derived subindex.

    One logical record per chat; ``chat_id`` is the upsert key.
    """

    __tablename__ = "graph_data"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_record_id)
    chat_id: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    user_id: Mapped[str] = mapped_column(String(128), index=True)
    selected_provider: Mapped[str] = mapped_column(String(64))
    endpoint: Mapped[str] = mapped_column(String(1024))
    index_name: Mapped[str] = mapped_column(String(256))
    description: Mapped[str] = mapped_column(Text, default="")

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<GraphData(chat_id={self.chat_id}, index_name={self.index_name})>"
