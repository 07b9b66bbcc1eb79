"""
HTTP request/response schemas.

Bodies use camelCase on the wire (resumeContent, wordsCount, ...) and snake_case in
Python. Request fields are all optional at the schema level: presence and length
rules belong to the intake validator, so a missing field yields the same 400 error
message no matter how it's missing.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from herald.contexts.generation.normalizer import GenerationResult
from herald.contexts.intake.generation_request import GenerationRequest, PersonalInfo
from herald.contexts.templating.template_registry import Template


class ApiModel(BaseModel):
    """Base schema: camelCase aliases, snake_case attribute names accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class PersonalInfoIn(ApiModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class CoverLetterIn(ApiModel):
    resume_content: Optional[str] = None
    job_description: Optional[str] = None
    template_id: Optional[str] = "professional"
    additional_instructions: Optional[str] = None


class EmailIn(ApiModel):
    resume_content: Optional[str] = None
    job_description: Optional[str] = None
    template_id: Optional[str] = "email-english"
    personal_info: Optional[PersonalInfoIn] = None
    language: Optional[str] = "english"
    additional_instructions: Optional[str] = None


class MessageIn(ApiModel):
    resume_content: Optional[str] = None
    job_description: Optional[str] = None
    template_id: Optional[str] = "message-casual"
    personal_info: Optional[PersonalInfoIn] = None
    additional_instructions: Optional[str] = None


def _to_personal_info(p: Optional[PersonalInfoIn]) -> Optional[PersonalInfo]:
    """Schema -> PersonalInfo. None stays None."""
    if p is None:
        return None
    return PersonalInfo(
        name=p.name,
        phone=p.phone,
        email=p.email,
        linkedin=p.linkedin,
        github=p.github,
    )


def to_generation_request(body) -> GenerationRequest:
    """Convert any of the request schemas to a GenerationRequest."""
    return GenerationRequest(
        resume_content=body.resume_content,
        job_description=body.job_description,
        template_id=body.template_id,
        additional_instructions=body.additional_instructions,
        personal_info=_to_personal_info(getattr(body, "personal_info", None)),
        language=getattr(body, "language", None),
    )


# --- Responses ---


class CoverLetterTemplateOut(ApiModel):
    id: str
    name: str
    tone: str


class EmailTemplateOut(CoverLetterTemplateOut):
    language: str


class MessageTemplateOut(EmailTemplateOut):
    platform: Optional[str] = None


class CoverLetterMetadataOut(ApiModel):
    words_count: int
    generated_at: str
    template_used: str


class MetadataOut(CoverLetterMetadataOut):
    language: str


class CoverLetterOut(ApiModel):
    cover_letter: str
    template: CoverLetterTemplateOut
    metadata: CoverLetterMetadataOut


class EmailOut(ApiModel):
    email: str
    template: EmailTemplateOut
    metadata: MetadataOut


class MessageOut(ApiModel):
    message: str
    template: MessageTemplateOut
    metadata: MetadataOut


class TemplateSummaryOut(ApiModel):
    id: str
    name: str
    language: str
    tone: str
    structure: List[str]
    description: Optional[str] = None
    platform: Optional[str] = None


class TemplateListOut(ApiModel):
    content_type: str
    default: str
    templates: List[TemplateSummaryOut]


def to_cover_letter_out(result: GenerationResult) -> CoverLetterOut:
    t, m = result.template, result.metadata
    return CoverLetterOut(
        cover_letter=result.text,
        template=CoverLetterTemplateOut(id=t.id, name=t.name, tone=t.tone),
        metadata=CoverLetterMetadataOut(
            words_count=m.word_count,
            generated_at=m.generated_at,
            template_used=m.template_used,
        ),
    )


def to_email_out(result: GenerationResult) -> EmailOut:
    t, m = result.template, result.metadata
    return EmailOut(
        email=result.text,
        template=EmailTemplateOut(id=t.id, name=t.name, language=t.language, tone=t.tone),
        metadata=MetadataOut(
            words_count=m.word_count,
            generated_at=m.generated_at,
            template_used=m.template_used,
            language=m.language,
        ),
    )


def to_message_out(result: GenerationResult) -> MessageOut:
    t, m = result.template, result.metadata
    return MessageOut(
        message=result.text,
        template=MessageTemplateOut(
            id=t.id, name=t.name, language=t.language, platform=t.platform, tone=t.tone
        ),
        metadata=MetadataOut(
            words_count=m.word_count,
            generated_at=m.generated_at,
            template_used=m.template_used,
            language=m.language,
        ),
    )


def to_template_summary(template: Template) -> TemplateSummaryOut:
    return TemplateSummaryOut(
        id=template.id,
        name=template.name,
        language=template.language,
        tone=template.tone,
        structure=list(template.structure),
        description=template.description,
        platform=template.platform,
    )
