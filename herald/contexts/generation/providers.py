"""
LLM provider abstraction.

One interface, three interchangeable backends. A deployment picks exactly one
provider at startup via get_provider(); there is no fallback chain across providers
and no retry. Every failure (non-success status, SDK or transport exception, payload
without the generated-text field) surfaces as ProviderError so callers handle all
backends identically.

Providers return the raw generated string only. A present-but-empty text field
comes back as "", which the normalizer rejects as an empty generation.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from herald.contexts.generation.logger import log_provider_call, log_provider_failure
from herald.contexts.templating.template_registry import ContentType
from herald.utils.exceptions import ProviderError

PROVIDER_FAILURE_MESSAGE = "Content generation failed. Please try again later."

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "mistral": "mistral-small-latest",
}

# Fixed sampling parameters for OpenAI, per content type
OPENAI_SAMPLING = {
    ContentType.COVER_LETTER: {"max_tokens": 1000, "temperature": 0.7},
    ContentType.EMAIL: {"max_tokens": 600, "temperature": 0.7},
    ContentType.MESSAGE: {"max_tokens": 400, "temperature": 0.8},
}

MISTRAL_API_URL = "https://api.mistral.ai/v1/chat/completions"


# --- LLM Provider Classes ---


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "gemini", "openai")
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, prompt: str, system_instruction: str, content_type: str) -> str:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate(
        self,
        prompt: str,
        system_instruction: str,
        content_type: str = ContentType.COVER_LETTER,
    ) -> str:
        """
        Generate text for a composed prompt.

        Args:
            prompt: Composed prompt (sent as the user turn)
            system_instruction: Fixed system turn for the content type
            content_type: One of ContentType.ALL

        Returns:
            Raw generated text (possibly empty)

        Raises:
            ProviderError: On any backend failure
        """
        log_provider_call(self.name, content_type, len(prompt))
        try:
            return self._call_api(prompt, system_instruction, content_type)
        except ProviderError as e:
            log_provider_failure(self.name, content_type, e.detail)
            raise
        except Exception as e:
            log_provider_failure(self.name, content_type, f"{type(e).__name__}: {e}")
            raise ProviderError(PROVIDER_FAILURE_MESSAGE, provider=self.name, original_error=e) from e


class GeminiProvider(LLMProvider):
    """Google Gemini provider (google-genai SDK)."""

    _provider_prefix = "gemini"

    def __init__(
        self,
        model: str = None,
        client: Any = None,
        api_key: str = None,
        timeout_s: Optional[float] = None,
    ):
        if client is None:
            # Lazy import - google-genai SDK is heavy, only load if this provider is used
            try:
                from google import genai
            except ImportError:
                raise ImportError("google-genai package required. Install with: pip install google-genai")

            api_key = api_key or os.getenv("GEMINI_API_KEY")
            if not api_key:
                raise ValueError("GEMINI_API_KEY environment variable not set")

            # HttpOptions.timeout is in milliseconds
            http_options = {"timeout": int(timeout_s * 1000)} if timeout_s else None
            client = genai.Client(api_key=api_key, http_options=http_options)

        self.client = client
        self.update_model(model or os.getenv("GEMINI_MODEL") or DEFAULT_MODELS["gemini"])

    def _call_api(self, prompt: str, system_instruction: str, content_type: str) -> str:
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config={"system_instruction": system_instruction},
        )

        text = getattr(response, "text", None)
        if text is None and not getattr(response, "candidates", None):
            # Blocked or malformed: no candidates at all
            raise ProviderError(
                PROVIDER_FAILURE_MESSAGE,
                provider=self.name,
                original_error=ValueError("Gemini response contained no candidates"),
            )
        return text or ""


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider with per-content-type sampling."""

    _provider_prefix = "openai"

    def __init__(
        self,
        model: str = None,
        client: Any = None,
        api_key: str = None,
        timeout_s: Optional[float] = None,
    ):
        if client is None:
            # Lazy import - openai SDK is heavy, only load if this provider is used
            try:
                import openai
            except ImportError:
                raise ImportError("openai package required. Install with: pip install openai")

            api_key = api_key or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError("OPENAI_API_KEY environment variable not set")

            # max_retries=0: failures surface immediately
            client = openai.OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)

        self.client = client
        self.update_model(model or os.getenv("OPENAI_MODEL") or DEFAULT_MODELS["openai"])

    def _call_api(self, prompt: str, system_instruction: str, content_type: str) -> str:
        sampling = OPENAI_SAMPLING.get(content_type, OPENAI_SAMPLING[ContentType.COVER_LETTER])
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            **sampling,
        )

        choices = getattr(response, "choices", None)
        if not choices or getattr(choices[0], "message", None) is None:
            raise ProviderError(
                PROVIDER_FAILURE_MESSAGE,
                provider=self.name,
                original_error=ValueError("OpenAI response missing choices[0].message"),
            )
        return choices[0].message.content or ""


class MistralProvider(LLMProvider):
    """Mistral chat-completions provider over plain HTTP (no sampling overrides)."""

    _provider_prefix = "mistral"

    def __init__(
        self,
        model: str = None,
        client: httpx.Client = None,
        api_key: str = None,
        timeout_s: Optional[float] = None,
        api_url: str = MISTRAL_API_URL,
    ):
        api_key = api_key or os.getenv("MISTRAL_API_KEY")
        if not api_key:
            raise ValueError("MISTRAL_API_KEY environment variable not set")

        self._api_key = api_key
        self.api_url = api_url
        self.client = client if client is not None else httpx.Client(timeout=timeout_s)
        self.update_model(model or os.getenv("MISTRAL_MODEL") or DEFAULT_MODELS["mistral"])

    def _call_api(self, prompt: str, system_instruction: str, content_type: str) -> str:
        response = self.client.post(
            self.api_url,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "application/json",
            },
            json={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": prompt},
                ],
            },
        )

        if response.is_error:
            raise ProviderError(
                PROVIDER_FAILURE_MESSAGE,
                provider=self.name,
                original_error=httpx.HTTPStatusError(
                    f"Mistral API returned status {response.status_code}",
                    request=response.request,
                    response=response,
                ),
            )

        return extract_chat_content(response.json(), provider=self.name)


# --- Response Parsing ---


def extract_chat_content(payload: Dict[str, Any], provider: str = None) -> str:
    """
    Pull the generated text out of a chat-completions JSON payload.

    Expects {"choices": [{"message": {"content": ...}}]}. Content may be a string
    or a list of chunks ({"type": "text", "text": ...}).

    Args:
        payload: Decoded response body
        provider: Provider name for error reporting

    Returns:
        Generated text ("" if the content field is null or empty)

    Raises:
        ProviderError: If the payload has no choices[0].message
    """
    try:
        message = payload["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError(PROVIDER_FAILURE_MESSAGE, provider=provider, original_error=e) from e

    if not isinstance(message, dict):
        raise ProviderError(
            PROVIDER_FAILURE_MESSAGE,
            provider=provider,
            original_error=ValueError("choices[0].message is not an object"),
        )

    content = message.get("content")
    if isinstance(content, list):
        return "".join(
            chunk.get("text", "")
            for chunk in content
            if isinstance(chunk, dict) and chunk.get("type", "text") == "text"
        )
    return content or ""


# --- Provider Factory ---


def get_provider(
    provider_name: str = None,
    model: str = None,
    timeout_s: Optional[float] = None,
) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "gemini", "openai" or "mistral" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific env var, then DEFAULT_MODELS)
        timeout_s: Timeout for outbound calls (None = no timeout)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "gemini")
    provider_name = provider_name.lower()

    if provider_name == "gemini":
        return GeminiProvider(model=model, timeout_s=timeout_s)
    elif provider_name == "openai":
        return OpenAIProvider(model=model, timeout_s=timeout_s)
    elif provider_name == "mistral":
        return MistralProvider(model=model, timeout_s=timeout_s)
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'gemini', 'openai' or 'mistral'")
