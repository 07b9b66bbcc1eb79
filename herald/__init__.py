"""
HERALD - Hiring Email, Recruiter message And Letter Drafting

A request-handling service that turns a resume and a job description into a
tailored cover letter, job-application email, or recruiter message using an
interchangeable large-language-model backend.

Architecture:
- Intake Context: Request validation and per-client rate limiting
- Templating Context: Writing template catalogs and prompt composition
- Generation Context: LLM provider adapters, response normalization, orchestration
- Delivery Context: HTTP endpoints and error-to-status translation
"""

__version__ = "1.0.0"
