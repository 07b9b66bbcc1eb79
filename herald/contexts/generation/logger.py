"""
Generation context logger.

Provides logging interface for generation context with automatic [generate] prefix.
All generation modules should import from this module, not from loguru directly.

Only sizes, ids and error kinds are logged; resume and job description text never
reach the logs.
"""

from loguru import logger

CONTEXT_PREFIX = "[generate]"


def _log_info(message: str) -> None:
    """Log info message with [generate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [generate] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [generate] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [generate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [generate] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level generation-specific logging helpers


def log_provider_selected(provider_name: str) -> None:
    _log_info(f"Using LLM provider {provider_name}")


def log_provider_call(provider_name: str, content_type: str, prompt_length: int) -> None:
    _log_debug(f"Calling {provider_name} for {content_type} ({prompt_length} char prompt)")


def log_provider_failure(provider_name: str, content_type: str, detail: str) -> None:
    _log_error(f"{provider_name} failed for {content_type}: {detail}")


def log_generation_start(content_type: str, client_key: str, template_id) -> None:
    _log_info(f"Starting {content_type} generation for {client_key} (template: {template_id or 'default'})")


def log_generation_result(
    content_type: str,
    template_id: str,
    word_count: int,
    elapsed_time: float,
) -> None:
    _log_success(f"{content_type} generated with '{template_id}': {word_count} words ({elapsed_time:.2f}s)")


def log_empty_generation(content_type: str, provider_name: str) -> None:
    _log_warning(f"{provider_name} returned no usable {content_type} text")
