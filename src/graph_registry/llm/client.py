"""Chat completion clients using raw httpx."""

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from graph_registry.config import settings
from graph_registry.llm.exceptions import (
    LLMAuthenticationError,
    LLMConnectionError,
    LLMProviderNotConfiguredError,
    LLMRateLimitError,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

ChatMessage = dict[str, str]


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds or as an HTTP date.

    Returns:
        Seconds to wait (never negative), or None if absent or unparseable
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else None
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring unparseable Retry-After header: {value!r}")
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max((retry_at - datetime.now(timezone.utc)).total_seconds(), 0.0)


class BaseCompletionClient(ABC):
    """Base class for chat completion clients."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai')."""
        pass

    @abstractmethod
    async def complete(self, messages: list[ChatMessage], **kwargs: Any) -> str:
        """Send chat messages and return the first choice's text."""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        """Check if the completion service is accessible."""
        pass

    async def is_available(self) -> bool:
        """Lightweight check if the client is configured.

        Checks configuration only, without making network requests.
        """
        return True


class OpenAIChatClient(BaseCompletionClient):
    """Client for OpenAI-compatible ``/chat/completions`` endpoints.

    Uses raw httpx for API calls (no SDK dependency). Requests are not
    retried; transport failures surface as typed ``LLMError`` subclasses.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key (defaults to settings.OPENAI_API_KEY)
            model: Model to use (defaults to settings.OPENAI_MODEL)
            base_url: API base URL (defaults to settings.OPENAI_BASE_URL)
            timeout: Request timeout in seconds (defaults to settings.LLM_TIMEOUT)
        """
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT

        if not self.api_key:
            logger.warning("OpenAI API key not configured")

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "openai"

    async def is_available(self) -> bool:
        """Check if the client is configured (API key exists)."""
        return bool(self.api_key)

    def _get_headers(self) -> dict[str, str]:
        """Get API request headers."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def complete(self, messages: list[ChatMessage], **kwargs: Any) -> str:
        """Create a chat completion.

        Args:
            messages: Ordered ``{"role", "content"}`` messages
            **kwargs: Extra request fields (temperature, max_tokens, ...)

        Returns:
            Content of the first choice, or an empty string if there is none

        Raises:
            LLMAuthenticationError: If the API key is missing or rejected
            LLMRateLimitError: If the rate limit is exceeded
            LLMConnectionError: If the request fails in transport
            LLMResponseError: On any other error status or an unreadable body
        """
        if not self.api_key:
            raise LLMAuthenticationError(
                "API key not configured", provider=self.provider_name
            )

        payload = {"model": self.model, "messages": messages, **kwargs}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=self._get_headers(),
                    json=payload,
                )
            except httpx.ConnectError as e:
                raise LLMConnectionError(
                    f"Failed to connect: {e}", provider=self.provider_name
                ) from e
            except httpx.TimeoutException as e:
                raise LLMConnectionError(
                    f"Request timed out: {e}", provider=self.provider_name
                ) from e
            except httpx.TransportError as e:
                raise LLMConnectionError(
                    f"Transport error: {type(e).__name__}: {e}",
                    provider=self.provider_name,
                ) from e

        if response.status_code == 401:
            raise LLMAuthenticationError("Invalid API key", provider=self.provider_name)
        elif response.status_code == 429:
            raise LLMRateLimitError(
                "Rate limit exceeded",
                provider=self.provider_name,
                retry_after=parse_retry_after(response.headers.get("retry-after")),
            )
        elif response.status_code >= 400:
            raise LLMResponseError(
                f"API returned status {response.status_code}",
                provider=self.provider_name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
            choices = data.get("choices") or []
            if not choices:
                return ""
            message = choices[0].get("message") or {}
            return message.get("content") or ""
        except (ValueError, AttributeError, TypeError, KeyError, IndexError) as e:
            raise LLMResponseError(
                f"Unexpected response body: {type(e).__name__}",
                provider=self.provider_name,
                status_code=response.status_code,
            ) from e

    async def check_health(self) -> bool:
        """Check if the API is reachable with the configured key.

        Lists models, which does not consume completion tokens.
        """
        if not self.api_key:
            logger.warning("OpenAI health check: No API key configured")
            return False

        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(
                    f"{self.base_url}/models", headers=self._get_headers()
                )
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"OpenAI health check failed: {type(e).__name__}: {e}")
            return False


def get_completion_client(require_configured: bool = False) -> BaseCompletionClient:
    """Build the completion client from settings.

    Args:
        require_configured: Raise instead of returning an unconfigured client

    Raises:
        LLMProviderNotConfiguredError: If no API key is set and
            ``require_configured`` is True
    """
    client = OpenAIChatClient()
    if require_configured and not client.api_key:
        raise LLMProviderNotConfiguredError(
            "Set OPENAI_API_KEY to enable details generation",
            provider=client.provider_name,
        )
    return client
