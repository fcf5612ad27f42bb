"""Request and response schemas for graph data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Wire format uses camelCase; Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GraphDataCreate(_CamelModel):
    """Input for saving a graph data record."""

    chat_id: str = Field(..., min_length=1, max_length=128, description="Chat identifier (upsert key)")
    user_id: str = Field(..., min_length=1, max_length=128, description="Owner identifier")
    selected_provider: str = Field(
        ..., min_length=1, max_length=64, description="Backend that produced the index"
    )
    endpoint: str = Field(..., min_length=1, max_length=1024, description="Index service location")
    index_name: str = Field(..., min_length=1, max_length=256, description="Subindex name")
    description: str = Field(
        ..., max_length=10_000, description="Human-readable summary, may be empty"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "chatId": "chat-42",
                "userId": "user-7",
                "selectedProvider": "azure-search",
                "endpoint": "https://search.example.com",
                "indexName": "kickoff-notes",
                "description": "Planning discussion for the Q3 project kickoff.",
            }
        },
    )


class GraphDataRead(_CamelModel):
    """Stored graph data record."""

    id: str
    chat_id: str
    user_id: str
    selected_provider: str
    endpoint: str
    index_name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class GenerateDetailsRequest(_CamelModel):
    """Chat transcript to summarize."""

    chat_history: str = Field(..., description="Concatenated chat transcript")


class GeneratedDetails(BaseModel):
    """Title and description produced by the completion API."""

    model_config = ConfigDict(extra="allow")

    title: str
    description: str
