"""
Templating Context

Responsibilities:
- Holds the cover letter, email, and recruiter message template catalogs
- Resolves template ids, falling back to per-content-type defaults
- Composes the prompt sent to the LLM from a template and a request

Owns: Template catalogs, prompt scaffolds, output-language resolution
Never: Validates requests or talks to LLM providers
"""

from herald.contexts.templating.prompt_composer import compose_prompt, resolve_language
from herald.contexts.templating.template_registry import (
    ContentType,
    Template,
    TemplateCatalog,
    TemplateRegistry,
    get_registry,
    get_template,
)

__all__ = [
    "ContentType",
    "Template",
    "TemplateCatalog",
    "TemplateRegistry",
    "get_registry",
    "get_template",
    "compose_prompt",
    "resolve_language",
]
