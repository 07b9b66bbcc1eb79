"""
Response normalization.

Turns a provider's raw text into a GenerationResult: trimmed text, a crude word
count, and generation metadata.
"""

from dataclasses import dataclass
from typing import Optional

from herald.contexts.intake.generation_request import GenerationRequest
from herald.contexts.templating.prompt_composer import resolve_language
from herald.contexts.templating.template_registry import ContentType, Template
from herald.utils.exceptions import EmptyGenerationError
from herald.utils.timestamp import now_iso

CONTENT_TYPE_LABELS = {
    ContentType.COVER_LETTER: "cover letter",
    ContentType.EMAIL: "email",
    ContentType.MESSAGE: "message",
}


@dataclass(frozen=True)
class GenerationMetadata:
    """
    Attributes:
        word_count: Number of single-space-separated tokens in the text
        generated_at: UTC ISO 8601 timestamp
        template_used: Id of the template that was actually applied
        language: Output language (emails and messages only)
    """

    word_count: int
    generated_at: str
    template_used: str
    language: Optional[str] = None


@dataclass(frozen=True)
class GenerationResult:
    """Normalized generated text with the template that shaped it."""

    text: str
    template: Template
    metadata: GenerationMetadata


def count_words(text: str) -> int:
    """
    Count words by splitting on single spaces.

    Deliberately crude: runs of spaces produce empty tokens that still count, and
    newlines don't separate words.
    """
    return len(text.split(" "))


def normalize(
    raw_text: Optional[str],
    template: Template,
    request: GenerationRequest,
    language: Optional[str] = None,
) -> GenerationResult:
    """
    Build a GenerationResult from raw provider output.

    Args:
        raw_text: Provider output (may be None or whitespace)
        template: Resolved template used for the prompt
        request: The originating request
        language: Output language to record in metadata. When None, emails and
                  messages record the language resolved from template and request;
                  cover letters record none.

    Returns:
        GenerationResult

    Raises:
        EmptyGenerationError: If nothing is left after trimming
    """
    text = (raw_text or "").strip()
    if not text:
        label = CONTENT_TYPE_LABELS.get(template.content_type, "content")
        raise EmptyGenerationError(f"No {label} generated. Please try again.")

    if language is None and template.content_type in ContentType.REQUIRES_IDENTITY:
        language = resolve_language(template, request)

    metadata = GenerationMetadata(
        word_count=count_words(text),
        generated_at=now_iso(),
        template_used=template.id,
        language=language,
    )
    return GenerationResult(text=text, template=template, metadata=metadata)
