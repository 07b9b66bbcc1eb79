"""
Request orchestration.

Sequences one generation request through every stage:

    validate -> rate limit -> resolve template -> compose prompt -> provider -> normalize

Validation runs before the rate limiter so malformed submissions never spend a
client's allowance, and both run before any paid provider call. Errors propagate
as HeraldError subclasses; the delivery layer maps them to HTTP responses.
"""

import time

from herald.contexts.generation.logger import (
    log_empty_generation,
    log_generation_result,
    log_generation_start,
    log_provider_selected,
)
from herald.contexts.generation.normalizer import GenerationResult, normalize
from herald.contexts.generation.providers import LLMProvider
from herald.contexts.generation.system_prompts import system_instruction_for
from herald.contexts.intake.generation_request import GenerationRequest
from herald.contexts.intake.logger import log_validation_failed
from herald.contexts.intake.rate_limiter import RateLimiter
from herald.contexts.intake.request_validator import validate_request
from herald.contexts.templating.logger import log_template_resolved
from herald.contexts.templating.prompt_composer import compose_prompt, resolve_language
from herald.contexts.templating.template_registry import TemplateRegistry, get_registry
from herald.utils.exceptions import EmptyGenerationError, RateLimitError, ValidationError


class GenerationPipeline:
    """
    Runs generation requests against a single, fixed LLM provider.

    One instance is shared by all requests; the rate limiter is its only mutable
    state.

    Example:
        pipeline = GenerationPipeline(get_provider("openai"), RateLimiter())
        result = pipeline.run(ContentType.EMAIL, request, client_key="203.0.113.7")
    """

    def __init__(
        self,
        provider: LLMProvider,
        rate_limiter: RateLimiter = None,
        registry: TemplateRegistry = None,
    ):
        self.provider = provider
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter()
        self.registry = registry if registry is not None else get_registry()
        log_provider_selected(provider.name)

    def run(self, content_type: str, request: GenerationRequest, client_key: str) -> GenerationResult:
        """
        Generate content for one request.

        Args:
            content_type: One of ContentType.ALL
            request: Client request
            client_key: Rate-limit bucket for the caller

        Returns:
            GenerationResult

        Raises:
            ValidationError: Missing fields or content too short (400)
            RateLimitError: Client exhausted its window allowance (429)
            ProviderError: Backend failure (500)
            EmptyGenerationError: Backend returned no usable text (500)
        """
        start_time = time.time()
        log_generation_start(content_type, client_key, request.template_id)

        try:
            validate_request(content_type, request)
        except ValidationError as e:
            log_validation_failed(content_type, e.message)
            raise

        if not self.rate_limiter.check_and_consume(client_key):
            raise RateLimitError(
                client_key=client_key,
                retry_after=self.rate_limiter.retry_after(client_key),
            )

        template = self.registry.get_template(content_type, request.template_id)
        log_template_resolved(content_type, request.template_id, template.id)

        language = resolve_language(template, request)
        prompt = compose_prompt(template, request)
        system_instruction = system_instruction_for(content_type, language)

        raw_text = self.provider.generate(prompt, system_instruction, content_type)

        try:
            result = normalize(raw_text, template, request)
        except EmptyGenerationError:
            log_empty_generation(content_type, self.provider.name)
            raise

        log_generation_result(
            content_type, template.id, result.metadata.word_count, time.time() - start_time
        )
        return result
