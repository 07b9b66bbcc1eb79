"""
Generation request data structures.

A GenerationRequest is built once per incoming call from the HTTP body and dropped
when the response is sent. Nothing here is persisted.
"""

from dataclasses import dataclass
from typing import Optional

NOT_PROVIDED = "Not provided"


@dataclass(frozen=True)
class PersonalInfo:
    """
    Sender identity rendered into emails and recruiter messages.

    Only name is required (and only for content types that address a recruiter);
    the rest render as "Not provided" when absent.
    """

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None

    def display(self) -> dict:
        """Field values for prompt rendering, with blanks replaced by NOT_PROVIDED."""
        return {
            "name": self.name or NOT_PROVIDED,
            "phone": self.phone or NOT_PROVIDED,
            "email": self.email or NOT_PROVIDED,
            "linkedin": self.linkedin or NOT_PROVIDED,
            "github": self.github or NOT_PROVIDED,
        }


@dataclass(frozen=True)
class GenerationRequest:
    """
    One client request to generate a cover letter, email, or recruiter message.

    Attributes:
        resume_content: Plain resume text, used verbatim
        job_description: Plain job description text, used verbatim
        template_id: Requested template (None -> catalog default)
        additional_instructions: Free-text instructions appended to the prompt
        personal_info: Sender identity (required for email/message)
        language: Requested output language ('english' or 'hebrew')
    """

    resume_content: Optional[str] = None
    job_description: Optional[str] = None
    template_id: Optional[str] = None
    additional_instructions: Optional[str] = None
    personal_info: Optional[PersonalInfo] = None
    language: Optional[str] = None
