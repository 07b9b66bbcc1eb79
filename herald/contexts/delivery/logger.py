"""
Delivery context logger.

Provides logging interface for the HTTP layer with automatic [api] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from herald.utils.config import ServiceConfig
from herald.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[api]"


def setup_delivery_logger(config: ServiceConfig) -> Optional[Path]:
    """
    Setup logger for the API process.

    Args:
        config: Service configuration (log_dir, log_level, provider, limits)

    Returns:
        Path to log file, or None when logging to console only
    """
    log_dir = Path(config.log_dir) if config.log_dir else None
    return _setup_logger(
        context_name="api",
        log_dir=log_dir,
        level=config.log_level,
        extra_provenance={
            "LLM provider": config.llm_provider,
            "Rate limit": f"{config.rate_limit_max_requests}/{config.rate_limit_window_minutes}min",
            "Trust forwarded headers": config.trust_forwarded_headers,
        },
    )


def _log_warning(message: str) -> None:
    """Log warning message with [api] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [api] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def log_request_failed(path: str, exc: Exception, detail: str = None) -> None:
    """Log a handled failure: error kind and status, never the request body."""
    status = getattr(exc, "status_code", 400)
    reason = detail or str(getattr(exc, "message", exc))
    line = f"{path} -> {status} {type(exc).__name__}: {reason}"
    if status >= 500:
        _log_error(line)
    else:
        _log_warning(line)


def log_unexpected_error(path: str, exc: Exception) -> None:
    logger.opt(exception=exc).error(f"{CONTEXT_PREFIX} {path} -> 500 unexpected {type(exc).__name__}")
