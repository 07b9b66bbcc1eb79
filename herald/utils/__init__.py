"""
Shared utilities for HERALD.

Common functionality used across contexts:
- Error taxonomy
- Service configuration
- Logger setup
- Timestamps
"""

from herald.utils.exceptions import (
    EmptyGenerationError,
    HeraldError,
    ProviderError,
    RateLimitError,
    ValidationError,
)
from herald.utils.timestamp import now_iso, now_utc

__all__ = [
    "HeraldError",
    "ValidationError",
    "RateLimitError",
    "ProviderError",
    "EmptyGenerationError",
    "now_iso",
    "now_utc",
]
