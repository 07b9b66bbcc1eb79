"""
Request validation.

Cheap checks that run before any paid provider call. Length thresholds are
character counts, meant to reject near-empty submissions rather than judge quality.
"""

from herald.contexts.intake.generation_request import GenerationRequest
from herald.contexts.templating.template_registry import ContentType
from herald.utils.exceptions import ValidationError

MIN_RESUME_LENGTH = 50
MIN_JOB_DESCRIPTION_LENGTH = 100

SUPPORTED_LANGUAGES = ("english", "hebrew")

# Used in "... is required for {label} generation"
CONTENT_TYPE_LABELS = {
    ContentType.COVER_LETTER: "cover letter",
    ContentType.EMAIL: "email",
    ContentType.MESSAGE: "message",
}


def validate_request(content_type: str, request: GenerationRequest) -> None:
    """
    Check a request's required fields and minimum lengths.

    Checks run in order and the first failure is raised:
    1. resume and job description present
    2. sender name present (email and message only)
    3. resume at least MIN_RESUME_LENGTH characters
    4. job description at least MIN_JOB_DESCRIPTION_LENGTH characters
    5. language, if given, is supported

    Args:
        content_type: One of ContentType.ALL
        request: Request to check

    Raises:
        ValidationError: On the first failing check
        ValueError: If content_type is unknown
    """
    if content_type not in ContentType.ALL:
        raise ValueError(f"Unknown content type: {content_type}. Use one of {list(ContentType.ALL)}")

    if not request.resume_content or not request.job_description:
        raise ValidationError("Resume content and job description are required")

    if content_type in ContentType.REQUIRES_IDENTITY:
        if request.personal_info is None or not request.personal_info.name:
            label = CONTENT_TYPE_LABELS[content_type]
            raise ValidationError(
                f"Personal information with name is required for {label} generation"
            )

    if len(request.resume_content) < MIN_RESUME_LENGTH:
        raise ValidationError("Resume content seems too short. Please provide more details.")

    if len(request.job_description) < MIN_JOB_DESCRIPTION_LENGTH:
        raise ValidationError("Job description seems too short. Please provide more details.")

    if request.language is not None and request.language.lower() not in SUPPORTED_LANGUAGES:
        raise ValidationError(
            f"Unsupported language '{request.language}'. Use one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )
