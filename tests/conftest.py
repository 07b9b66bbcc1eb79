"""Shared fixtures for HERALD tests."""

import pytest

from herald.contexts.generation.providers import LLMProvider
from herald.contexts.intake.generation_request import GenerationRequest, PersonalInfo
from herald.contexts.intake.rate_limiter import RateLimiter

RESUME_TEXT = (
    "Dana Levi - Backend engineer with 4 years of Python, FastAPI and PostgreSQL "
    "experience. Led migration of a billing service to AWS Lambda."
)

JOB_DESCRIPTION_TEXT = (
    "We are hiring a Backend Engineer to build and scale our payments platform. "
    "You will design APIs in Python, own PostgreSQL schemas, and work closely with "
    "product. Recruiter: Noa Cohen."
)


class FakeProvider(LLMProvider):
    """Provider double that records calls and returns a canned response."""

    _provider_prefix = "fake"

    def __init__(self, response: str = "Dear Hiring Team, thank you.", error: Exception = None):
        self.response = response
        self.error = error
        self.calls = []
        self.update_model("test-model")

    def _call_api(self, prompt: str, system_instruction: str, content_type: str) -> str:
        self.calls.append(
            {"prompt": prompt, "system_instruction": system_instruction, "content_type": content_type}
        )
        if self.error is not None:
            raise self.error
        return self.response


class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def resume_text():
    return RESUME_TEXT


@pytest.fixture
def job_description_text():
    return JOB_DESCRIPTION_TEXT


@pytest.fixture
def cover_letter_request():
    return GenerationRequest(resume_content=RESUME_TEXT, job_description=JOB_DESCRIPTION_TEXT)


@pytest.fixture
def email_request():
    return GenerationRequest(
        resume_content=RESUME_TEXT,
        job_description=JOB_DESCRIPTION_TEXT,
        template_id="email-english",
        personal_info=PersonalInfo(name="Dana Levi", email="dana@example.com"),
        language="english",
    )


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def make_provider():
    """Factory for FakeProvider with a custom response or error."""
    return FakeProvider


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    return RateLimiter(max_requests=10, window_seconds=3600, clock=clock)
