"""
Intake Context

Responsibilities:
- Defines the transient request data structures
- Validates required fields and minimum content lengths
- Enforces per-client fixed-window rate limits

Owns: Request validation rules, rate-limit state
Never: Calls LLM providers or composes prompts
"""

from herald.contexts.intake.generation_request import GenerationRequest, PersonalInfo
from herald.contexts.intake.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimitEntry,
    RateLimiter,
    RateLimitStore,
    client_key_from_headers,
)
from herald.contexts.intake.request_validator import validate_request

__all__ = [
    "GenerationRequest",
    "PersonalInfo",
    "validate_request",
    "RateLimiter",
    "RateLimitEntry",
    "RateLimitStore",
    "InMemoryRateLimitStore",
    "client_key_from_headers",
]
