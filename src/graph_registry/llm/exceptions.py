"""Completion API exceptions with provider-specific handling."""


class LLMError(Exception):
    """Base exception for completion API operations."""

    def __init__(self, message: str, provider: str = "unknown"):
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class LLMConnectionError(LLMError):
    """Failed to connect to the completion API."""

    pass


class LLMRateLimitError(LLMError):
    """Rate limit exceeded."""

    def __init__(
        self, message: str, provider: str, retry_after: float | None = None
    ):
        self.retry_after = retry_after
        super().__init__(message, provider)


class LLMAuthenticationError(LLMError):
    """Authentication failed (invalid API key, etc.)."""

    pass


class LLMResponseError(LLMError):
    """The API answered with an error status or an unexpected body."""

    def __init__(self, message: str, provider: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, provider)


class LLMProviderNotConfiguredError(LLMError):
    """Provider is not properly configured."""

    pass
