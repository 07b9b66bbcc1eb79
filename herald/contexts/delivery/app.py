"""
HTTP API.

One POST endpoint per content type, each with a GET liveness companion:

    POST/GET /api/generate-cover-letter
    POST/GET /api/generate-email
    POST/GET /api/generate-message
    GET      /api/templates/{content_type}

Every failure leaves as `{"error": message}` with the status carried by the error:
400 validation, 429 rate limit, 500 provider failure or empty generation.

Run with the app factory:
    uvicorn herald.contexts.delivery.app:create_app --factory
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from herald import __version__
from herald.contexts.delivery.logger import (
    log_request_failed,
    log_unexpected_error,
    setup_delivery_logger,
)
from herald.contexts.delivery.schemas import (
    CoverLetterIn,
    CoverLetterOut,
    EmailIn,
    EmailOut,
    MessageIn,
    MessageOut,
    TemplateListOut,
    to_cover_letter_out,
    to_email_out,
    to_generation_request,
    to_message_out,
    to_template_summary,
)
from herald.contexts.generation.pipeline import GenerationPipeline
from herald.contexts.generation.providers import LLMProvider, get_provider
from herald.contexts.intake.rate_limiter import RateLimiter, client_key_from_headers
from herald.contexts.templating.template_registry import (
    ContentType,
    TemplateRegistry,
    get_registry,
)
from herald.utils.config import ServiceConfig, load_config
from herald.utils.exceptions import HeraldError, RateLimitError
from herald.utils.timestamp import now_iso

INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."


def create_app(
    config: ServiceConfig = None,
    provider: LLMProvider = None,
    rate_limiter: RateLimiter = None,
    registry: TemplateRegistry = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Service configuration (default: load_config())
        provider: LLM provider (default: built from config.llm_provider)
        rate_limiter: Shared limiter (default: built from config rate-limit settings)
        registry: Template registry (default: packaged catalogs)
        configure_logging: Install loguru handlers from config

    Returns:
        FastAPI app with the pipeline on app.state.pipeline
    """
    if config is None:
        config = load_config()

    if configure_logging:
        setup_delivery_logger(config)

    if provider is None:
        provider = get_provider(config.llm_provider, config.llm_model, config.provider_timeout_s)
    if rate_limiter is None:
        rate_limiter = RateLimiter(
            max_requests=config.rate_limit_max_requests,
            window_seconds=config.rate_limit_window_seconds,
        )
    if registry is None:
        registry = get_registry()

    pipeline = GenerationPipeline(provider, rate_limiter, registry)

    app = FastAPI(title="HERALD API", version=__version__)
    app.state.config = config
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    def client_key(request: Request) -> str:
        peer = request.client.host if request.client else None
        return client_key_from_headers(request.headers, peer, config.trust_forwarded_headers)

    # -------- Cover letter --------

    @app.post("/api/generate-cover-letter", response_model=CoverLetterOut)
    def generate_cover_letter(body: CoverLetterIn, request: Request):
        result = pipeline.run(
            ContentType.COVER_LETTER, to_generation_request(body), client_key(request)
        )
        return to_cover_letter_out(result)

    @app.get("/api/generate-cover-letter")
    def cover_letter_health():
        return _health("cover-letter-generation")

    # -------- Email --------

    @app.post("/api/generate-email", response_model=EmailOut)
    def generate_email(body: EmailIn, request: Request):
        result = pipeline.run(ContentType.EMAIL, to_generation_request(body), client_key(request))
        return to_email_out(result)

    @app.get("/api/generate-email")
    def email_health():
        return _health("email-generation")

    # -------- Recruiter message --------

    @app.post("/api/generate-message", response_model=MessageOut)
    def generate_message(body: MessageIn, request: Request):
        result = pipeline.run(ContentType.MESSAGE, to_generation_request(body), client_key(request))
        return to_message_out(result)

    @app.get("/api/generate-message")
    def message_health():
        return _health("message-generation")

    # -------- Template catalogs --------

    @app.get("/api/templates/{content_type}", response_model=TemplateListOut)
    def list_templates(content_type: str):
        if content_type not in ContentType.ALL:
            return JSONResponse(
                status_code=404,
                content={"error": f"Unknown content type '{content_type}'"},
            )
        catalog = registry.get_catalog(content_type)
        return TemplateListOut(
            content_type=content_type,
            default=catalog.default_id,
            templates=[to_template_summary(t) for t in catalog.templates.values()],
        )

    return app


def _health(service: str) -> dict:
    return {
        "status": "ok",
        "service": service,
        "timestamp": now_iso(),
        "version": __version__,
    }


def _register_error_handlers(app: FastAPI) -> None:
    """Translate every failure into an {"error": ...} body."""

    @app.exception_handler(HeraldError)
    async def herald_error_handler(request: Request, exc: HeraldError):
        log_request_failed(request.url.path, exc)
        headers = None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "Invalid request body"
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            message = errors[0].get("msg", "")
            detail = f"Invalid request body: {location}: {message}" if location else f"{detail}: {message}"
        log_request_failed(request.url.path, exc, detail)
        return JSONResponse(status_code=400, content={"error": detail})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        log_unexpected_error(request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
