"""
Integration tests for the HTTP API.
Tests: JSON body -> FastAPI route -> pipeline (fake provider) -> JSON response / error body.
"""

import pytest
from fastapi.testclient import TestClient

from herald.contexts.delivery.app import INTERNAL_ERROR_MESSAGE, create_app
from herald.contexts.generation.providers import PROVIDER_FAILURE_MESSAGE
from herald.utils.config import ServiceConfig

RESUME = "Backend engineer, 4 years of Python and PostgreSQL. " + "r" * 20
JOB = "Backend Engineer at a payments startup. Build APIs in Python, own schemas. " + "j" * 60
CLIENT_HEADERS = {"x-forwarded-for": "203.0.113.7"}


def _client(provider, **config_fields) -> TestClient:
    config = ServiceConfig(**config_fields)
    app = create_app(config=config, provider=provider, configure_logging=False)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def client(fake_provider):
    return _client(fake_provider)


# --- Generation endpoints ---


@pytest.mark.integration
def test_generate_cover_letter(client, fake_provider):
    response = client.post(
        "/api/generate-cover-letter",
        json={"resumeContent": RESUME, "jobDescription": JOB, "templateId": "technical"},
        headers=CLIENT_HEADERS,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["coverLetter"] == "Dear Hiring Team, thank you."
    assert set(body["template"]) == {"id", "name", "tone"}
    assert body["template"]["id"] == "technical"
    assert body["metadata"]["wordsCount"] == 5
    assert body["metadata"]["templateUsed"] == "technical"
    assert body["metadata"]["generatedAt"].endswith("Z")
    assert "language" not in body["metadata"]
    assert fake_provider.calls[0]["content_type"] == "cover-letter"


@pytest.mark.integration
def test_cover_letter_defaults_to_professional(client):
    response = client.post("/api/generate-cover-letter", json={"resumeContent": RESUME, "jobDescription": JOB})

    assert response.status_code == 200
    assert response.json()["metadata"]["templateUsed"] == "professional"


@pytest.mark.integration
def test_generate_hebrew_email(make_provider):
    provider = make_provider(response="שלום רב, שמי דנה ואשמח להגיש מועמדות")
    client = _client(provider)

    response = client.post(
        "/api/generate-email",
        json={
            "resumeContent": "r" * 60,
            "jobDescription": "j" * 120,
            "templateId": "email-hebrew",
            "personalInfo": {"name": "Dana"},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "שלום רב, שמי דנה ואשמח להגיש מועמדות"
    assert body["template"]["id"] == "email-hebrew"
    assert body["template"]["language"] == "hebrew"
    assert body["metadata"]["language"] == "hebrew"
    assert body["metadata"]["templateUsed"] == "email-hebrew"

    prompt = provider.calls[0]["prompt"]
    assert "Write the entire email in Hebrew" in prompt
    assert "Phone: Not provided" in prompt


@pytest.mark.integration
def test_generate_message(client):
    response = client.post(
        "/api/generate-message",
        json={"resumeContent": RESUME, "jobDescription": JOB, "personalInfo": {"name": "Dana", "phone": "050-1234567"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Dear Hiring Team, thank you."
    assert body["template"]["id"] == "message-casual"
    assert body["template"]["platform"]
    assert body["metadata"]["language"] == "hebrew"


@pytest.mark.integration
def test_snake_case_body_accepted(client):
    response = client.post(
        "/api/generate-cover-letter",
        json={"resume_content": RESUME, "job_description": JOB},
    )
    assert response.status_code == 200


# --- Errors ---


@pytest.mark.integration
@pytest.mark.parametrize(
    "path, body, message",
    [
        ("/api/generate-cover-letter", {"jobDescription": JOB}, "Resume content and job description are required"),
        ("/api/generate-cover-letter", {"resumeContent": "short", "jobDescription": JOB}, "Resume content seems too short. Please provide more details."),
        ("/api/generate-cover-letter", {"resumeContent": RESUME, "jobDescription": "short"}, "Job description seems too short. Please provide more details."),
        ("/api/generate-email", {"resumeContent": RESUME, "jobDescription": JOB}, "Personal information with name is required for email generation"),
        ("/api/generate-message", {"resumeContent": RESUME, "jobDescription": JOB, "personalInfo": {}}, "Personal information with name is required for message generation"),
    ],
)
def test_validation_errors(client, fake_provider, path, body, message):
    response = client.post(path, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": message}
    assert fake_provider.calls == []


@pytest.mark.integration
def test_malformed_body(client):
    response = client.post("/api/generate-cover-letter", json={"resumeContent": 12345, "jobDescription": JOB})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request body")


@pytest.mark.integration
def test_non_json_body(client):
    response = client.post(
        "/api/generate-email",
        content=b"not json at all",
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.integration
def test_rate_limit(fake_provider):
    client = _client(fake_provider, rate_limit_max_requests=2)
    body = {"resumeContent": RESUME, "jobDescription": JOB}

    assert client.post("/api/generate-cover-letter", json=body, headers=CLIENT_HEADERS).status_code == 200
    assert client.post("/api/generate-cover-letter", json=body, headers=CLIENT_HEADERS).status_code == 200

    response = client.post("/api/generate-cover-letter", json=body, headers=CLIENT_HEADERS)
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again later."}
    assert int(response.headers["retry-after"]) > 0
    assert len(fake_provider.calls) == 2

    # Other clients are unaffected
    other = client.post("/api/generate-cover-letter", json=body, headers={"x-forwarded-for": "198.51.100.9"})
    assert other.status_code == 200


@pytest.mark.integration
def test_rate_limit_shared_across_endpoints(fake_provider):
    client = _client(fake_provider, rate_limit_max_requests=1)

    first = client.post(
        "/api/generate-cover-letter",
        json={"resumeContent": RESUME, "jobDescription": JOB},
        headers=CLIENT_HEADERS,
    )
    second = client.post(
        "/api/generate-message",
        json={"resumeContent": RESUME, "jobDescription": JOB, "personalInfo": {"name": "Dana"}},
        headers=CLIENT_HEADERS,
    )

    assert first.status_code == 200
    assert second.status_code == 429


@pytest.mark.integration
def test_invalid_requests_do_not_consume_allowance(fake_provider):
    client = _client(fake_provider, rate_limit_max_requests=1)

    for _ in range(3):
        bad = client.post("/api/generate-cover-letter", json={"resumeContent": "x"}, headers=CLIENT_HEADERS)
        assert bad.status_code == 400

    good = client.post(
        "/api/generate-cover-letter",
        json={"resumeContent": RESUME, "jobDescription": JOB},
        headers=CLIENT_HEADERS,
    )
    assert good.status_code == 200


@pytest.mark.integration
def test_provider_failure(make_provider):
    client = _client(make_provider(error=RuntimeError("upstream exploded with secrets")))

    response = client.post("/api/generate-cover-letter", json={"resumeContent": RESUME, "jobDescription": JOB})

    assert response.status_code == 500
    assert response.json() == {"error": PROVIDER_FAILURE_MESSAGE}


@pytest.mark.integration
def test_empty_generation(make_provider):
    client = _client(make_provider(response="   "))

    response = client.post(
        "/api/generate-email",
        json={"resumeContent": RESUME, "jobDescription": JOB, "personalInfo": {"name": "Dana"}},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "No email generated. Please try again."}


@pytest.mark.integration
def test_unexpected_error(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("bug")

    monkeypatch.setattr(client.app.state.pipeline, "run", boom)
    response = client.post("/api/generate-cover-letter", json={"resumeContent": RESUME, "jobDescription": JOB})

    assert response.status_code == 500
    assert response.json() == {"error": INTERNAL_ERROR_MESSAGE}


# --- Liveness and catalogs ---


@pytest.mark.integration
@pytest.mark.parametrize(
    "path, service",
    [
        ("/api/generate-cover-letter", "cover-letter-generation"),
        ("/api/generate-email", "email-generation"),
        ("/api/generate-message", "message-generation"),
    ],
)
def test_liveness(client, fake_provider, path, service):
    response = client.get(path)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == service
    assert body["timestamp"].endswith("Z")
    assert fake_provider.calls == []


@pytest.mark.integration
def test_list_templates(client):
    response = client.get("/api/templates/email")

    assert response.status_code == 200
    body = response.json()
    assert body["contentType"] == "email"
    assert body["default"] == "email-english"
    ids = [t["id"] for t in body["templates"]]
    assert "email-hebrew" in ids
    assert all(t["structure"] for t in body["templates"])


@pytest.mark.integration
def test_list_templates_unknown_type(client):
    response = client.get("/api/templates/fax")

    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.integration
def test_cors_headers(client):
    response = client.get("/api/generate-email", headers={"Origin": "https://jobs.example"})
    assert response.headers["access-control-allow-origin"] == "*"
