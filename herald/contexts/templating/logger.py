"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_catalog_loaded(content_type: str, template_count: int, default_id: str) -> None:
    _log_debug(f"Loaded {content_type} catalog: {template_count} template(s), default '{default_id}'")


def log_template_resolved(content_type: str, requested_id, resolved_id: str) -> None:
    """Log which template a request ended up with, noting fallbacks."""
    if requested_id and requested_id != resolved_id:
        _log_info(
            f"Unknown {content_type} template '{requested_id}', falling back to '{resolved_id}'"
        )
    else:
        _log_debug(f"Using {content_type} template '{resolved_id}'")


def log_prompt_composed(template_id: str, language: str, prompt_length: int) -> None:
    _log_debug(f"Composed prompt from '{template_id}' ({language}, {prompt_length} chars)")
