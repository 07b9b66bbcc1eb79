"""
Prompt composition.

Merges a template's tone, structure, and instruction fragment with the user's
resume, job description, optional instructions, and (for emails and recruiter
messages) personal info into a single instruction block.

Each content type has a fixed scaffold in prompts/{content_type}.txt.jinja. User text
is inserted verbatim; nothing is truncated or summarized, and nothing
time-dependent or random goes into the prompt, so identical inputs always produce
byte-identical output.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template as JinjaTemplate

from herald.contexts.intake.generation_request import GenerationRequest, PersonalInfo
from herald.contexts.templating.logger import log_prompt_composed
from herald.contexts.templating.template_registry import ContentType, Template

PROMPTS_PATH = Path(__file__).resolve().parent / "prompts"

DEFAULT_LANGUAGE = "english"

LANGUAGE_LABELS = {
    "english": "English",
    "hebrew": "Hebrew",
}


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(PROMPTS_PATH)),
        # Catches silent failures
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def get_scaffold(content_type: str) -> JinjaTemplate:
    """
    Load the prompt scaffold for a content type.

    Raises:
        ValueError: If content_type isn't one of ContentType.ALL
    """
    if content_type not in ContentType.ALL:
        raise ValueError(f"Unknown content type: {content_type}. Use one of {list(ContentType.ALL)}")
    return _environment().get_template(f"{content_type}.txt.jinja")


def resolve_language(template: Template, request: GenerationRequest) -> str:
    """
    Decide the output language for a request.

    A Hebrew-specific template always writes Hebrew. Otherwise the requested
    language wins, then the template's own language.

    Returns:
        'english' or 'hebrew'
    """
    if template.is_hebrew:
        return "hebrew"
    if request.language:
        return request.language.lower()
    return template.language or DEFAULT_LANGUAGE


def compose_prompt(template: Template, request: GenerationRequest) -> str:
    """
    Build the full prompt for a request.

    Args:
        template: Resolved template (its content_type selects the scaffold)
        request: Validated request

    Returns:
        Prompt text
    """
    language = resolve_language(template, request)
    personal_info = request.personal_info or PersonalInfo()

    prompt = get_scaffold(template.content_type).render(
        template=template,
        structure=", ".join(template.structure),
        resume_content=request.resume_content,
        job_description=request.job_description,
        additional_instructions=request.additional_instructions,
        personal=personal_info.display(),
        language_label=LANGUAGE_LABELS.get(language, language.capitalize()),
        hebrew=language == "hebrew",
    )

    log_prompt_composed(template.id, language, len(prompt))
    return prompt
