"""
Error taxonomy for the generation pipeline.

Every error carries the HTTP status it maps to, so the delivery layer can turn any
of them into an `{"error": message}` body without knowing which stage raised it.
"""

from typing import Optional


class HeraldError(Exception):
    """
    Base class for errors surfaced to API clients.

    Attributes:
        message: Client-facing error description
        status_code: HTTP status code the error maps to
    """

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(HeraldError):
    """Raised when a request is missing fields or its content is too short."""

    status_code = 400


class RateLimitError(HeraldError):
    """
    Raised when a client key has exhausted its request allowance for the window.

    Attributes:
        client_key: Rate-limit bucket that was exhausted
        retry_after: Seconds until the bucket's window resets (None if unknown)
    """

    status_code = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        client_key: Optional[str] = None,
        retry_after: Optional[int] = None,
    ):
        self.client_key = client_key
        self.retry_after = retry_after
        super().__init__(message)


class ProviderError(HeraldError):
    """
    Raised when an LLM backend fails: non-success status, SDK/transport exception,
    or a response payload without the generated-text field.

    Attributes:
        provider: Provider name (e.g., "openai/gpt-4o-mini")
        original_error: The underlying exception, if any
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.provider = provider
        self.original_error = original_error

        parts = [message]
        if provider:
            parts.append(f"Provider: {provider}")
        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        self.detail = "\n".join(parts)
        super().__init__(message)

    def __str__(self) -> str:
        return self.detail


class EmptyGenerationError(HeraldError):
    """Raised when a provider returned no usable text after trimming."""

    status_code = 500
