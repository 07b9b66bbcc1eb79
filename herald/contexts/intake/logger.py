"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_window_opened(client_key: str, reset_at: float) -> None:
    _log_debug(f"Opened rate-limit window for {client_key} (resets at {reset_at:.0f})")


def log_rate_limit_denied(client_key: str, count: int, seconds_left: float) -> None:
    _log_warning(
        f"Rate limit exceeded for {client_key}: {count} request(s), "
        f"window resets in {seconds_left:.0f}s"
    )


def log_validation_failed(content_type: str, reason: str) -> None:
    _log_info(f"Rejected {content_type} request: {reason}")
