"""
Service configuration.

Settings are resolved in three layers, later layers overriding earlier ones:

1. Structured defaults (ServiceConfig below)
2. Optional YAML file at HERALD_CONFIG_PATH
3. Environment variables (a local .env file is loaded first)

Examples:
    >>> config = load_config()
    >>> config.rate_limit_max_requests
    10

    # Override from a dict, e.g. in tests
    >>> config = load_config(overrides={"llm_provider": "mistral"})
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

# Environment variable -> ServiceConfig field
ENV_VARIABLES = {
    "LLM_PROVIDER": "llm_provider",
    "LLM_MODEL": "llm_model",
    "RATE_LIMIT_MAX_REQUESTS": "rate_limit_max_requests",
    "RATE_LIMIT_WINDOW_MINUTES": "rate_limit_window_minutes",
    "TRUST_FORWARDED_HEADERS": "trust_forwarded_headers",
    "PROVIDER_TIMEOUT_S": "provider_timeout_s",
    "LOGS_PATH": "log_dir",
    "LOG_LEVEL": "log_level",
}


@dataclass
class ServiceConfig:
    """
    Runtime settings for the generation service.

    Attributes:
        llm_provider: Backend used for every request ("gemini", "openai" or "mistral")
        llm_model: Model override for the chosen backend (None = provider default)
        rate_limit_max_requests: Requests allowed per client key per window
        rate_limit_window_minutes: Fixed-window length
        trust_forwarded_headers: Derive client keys from x-forwarded-for / x-real-ip.
            Disable for direct-connection deployments so the socket address is used.
        provider_timeout_s: Timeout for outbound provider calls (None = wait forever)
        log_dir: Directory for log files (None = console only)
        log_level: Console log level
        cors_origins: Allowed CORS origins
    """

    llm_provider: str = "gemini"
    llm_model: Optional[str] = None
    rate_limit_max_requests: int = 10
    rate_limit_window_minutes: int = 60
    trust_forwarded_headers: bool = True
    provider_timeout_s: Optional[float] = 60.0
    log_dir: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def rate_limit_window_seconds(self) -> int:
        return self.rate_limit_window_minutes * 60


def _env_overrides() -> Dict[str, Any]:
    """Collect config values set in the environment."""
    overrides = {}
    for env_name, field_name in ENV_VARIABLES.items():
        value = os.getenv(env_name)
        if value is not None and value != "":
            overrides[field_name] = value

    cors = os.getenv("CORS_ORIGINS")
    if cors:
        overrides["cors_origins"] = [origin.strip() for origin in cors.split(",") if origin.strip()]

    return overrides


def load_config(config_path: Path = None, overrides: Dict[str, Any] = None) -> ServiceConfig:
    """
    Build the service configuration.

    Args:
        config_path: Optional YAML file (defaults to HERALD_CONFIG_PATH, if set)
        overrides: Final overrides applied after the environment

    Returns:
        ServiceConfig with all layers merged and type-checked

    Raises:
        omegaconf.errors.ValidationError: If a value can't be converted to its field type
        ValueError: If llm_provider names an unknown backend or a limit is not positive
    """
    base = OmegaConf.structured(ServiceConfig)
    layers = [base]

    if config_path is None and os.getenv("HERALD_CONFIG_PATH"):
        config_path = Path(os.getenv("HERALD_CONFIG_PATH"))
    if config_path is not None:
        layers.append(OmegaConf.load(config_path))

    layers.append(OmegaConf.create(_env_overrides()))
    if overrides:
        layers.append(OmegaConf.create(overrides))

    merged = OmegaConf.merge(*layers)
    config: ServiceConfig = OmegaConf.to_object(merged)

    config.llm_provider = config.llm_provider.lower()
    if config.llm_provider not in ("gemini", "openai", "mistral"):
        raise ValueError(
            f"Unknown provider: {config.llm_provider}. Use 'gemini', 'openai' or 'mistral'"
        )
    if config.rate_limit_max_requests < 1 or config.rate_limit_window_minutes < 1:
        raise ValueError("Rate limit ceiling and window must both be positive")

    return config
