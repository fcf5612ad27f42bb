"""Chat completion API clients."""

from graph_registry.llm.client import (
    BaseCompletionClient,
    ChatMessage,
    OpenAIChatClient,
    get_completion_client,
)
from graph_registry.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMError,
    LLMProviderNotConfiguredError,
    LLMRateLimitError,
    LLMResponseError,
)

__all__ = [
    # Clients
    "BaseCompletionClient",
    "ChatMessage",
    "OpenAIChatClient",
    "get_completion_client",
    # Exceptions
    "LLMError",
    "LLMConnectionError",
    "LLMAuthenticationError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMProviderNotConfiguredError",
]
