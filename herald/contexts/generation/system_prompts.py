"""
Fixed system turns sent alongside each composed prompt.

The composed prompt carries everything request-specific; these only set the
writer's role. Email generation has one per output language.
"""

from herald.contexts.templating.template_registry import ContentType

_COVER_LETTER_SYSTEM_PROMPT = """\
You are an expert career coach and professional cover letter writer.
Write tailored, specific cover letters grounded only in the candidate's resume.
Never invent employers, degrees, or achievements. Return only the letter text."""

_EMAIL_SYSTEM_PROMPTS = {
    "english": """\
You are an expert at writing concise, professional job application emails in English.
Ground every claim in the candidate's resume and return only the email text.""",
    "hebrew": """\
You are an expert at writing professional job application emails in Hebrew.
Always answer in formal, grammatical Hebrew, ground every claim in the candidate's
resume, and return only the email text.""",
}

_MESSAGE_SYSTEM_PROMPT = """\
You write short, casual recruiter messages in modern colloquial Israeli Hebrew.
Keep the message friendly and brief, ground it in the candidate's resume, and return
only the message text."""


def system_instruction_for(content_type: str, language: str = "english") -> str:
    """
    Get the system instruction for a content type.

    Args:
        content_type: One of ContentType.ALL
        language: Output language (only affects email)

    Returns:
        System instruction text

    Raises:
        ValueError: If content_type is unknown
    """
    if content_type == ContentType.COVER_LETTER:
        return _COVER_LETTER_SYSTEM_PROMPT
    if content_type == ContentType.EMAIL:
        return _EMAIL_SYSTEM_PROMPTS.get(language, _EMAIL_SYSTEM_PROMPTS["english"])
    if content_type == ContentType.MESSAGE:
        return _MESSAGE_SYSTEM_PROMPT
    raise ValueError(f"Unknown content type: {content_type}. Use one of {list(ContentType.ALL)}")
