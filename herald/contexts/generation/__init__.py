"""
Generation Context

Responsibilities:
- Wraps the Gemini, OpenAI, and Mistral backends behind one provider interface
- Supplies the fixed system instruction per content type
- Normalizes raw provider output into results with metadata
- Orchestrates a request through intake, templating, and a provider

Owns: Provider adapters, response normalization, the request pipeline
Never: Speaks HTTP to API clients
"""

from herald.contexts.generation.normalizer import (
    GenerationMetadata,
    GenerationResult,
    count_words,
    normalize,
)
from herald.contexts.generation.pipeline import GenerationPipeline
from herald.contexts.generation.providers import (
    GeminiProvider,
    LLMProvider,
    MistralProvider,
    OpenAIProvider,
    get_provider,
)
from herald.contexts.generation.system_prompts import system_instruction_for

__all__ = [
    # Providers
    "LLMProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "MistralProvider",
    "get_provider",
    "system_instruction_for",
    # Normalization
    "GenerationResult",
    "GenerationMetadata",
    "normalize",
    "count_words",
    # Orchestration
    "GenerationPipeline",
]
