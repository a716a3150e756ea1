"""
Integration Tests for the API endpoints

Full request/response flow through the FastAPI app with the LLM client and
SMTP replaced by mocks.
"""

import httpx
import pytest
from openai import APIConnectionError
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from main import app, create_app
from models.summarize_request import DEFAULT_INSTRUCTION
from routers.send_email import get_mail_service
from routers.summarize import get_summarizer_service
from services.errors import InvalidRequestError
from services.mail_service import MailService
from services.summarizer_service import SummarizerService
from utils.settings import MailSettings, Settings


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def summarizer(fake_llm_client):
    """Real SummarizerService over a mocked chat client."""
    service = SummarizerService(fake_llm_client, "test-model")
    app.dependency_overrides[get_summarizer_service] = lambda: service
    return service


@pytest.fixture
def mock_mail_service():
    service = MagicMock()
    service.send = AsyncMock()
    app.dependency_overrides[get_mail_service] = lambda: service
    return service


@pytest.fixture
def ethereal_mail_service():
    """Real MailService in ethereal mode with a fake account service."""
    def account_service(request):
        return httpx.Response(200, json={
            "status": "success",
            "user": "tester@ethereal.email",
            "pass": "secret",
        })

    service = MailService(
        MailSettings(provider="ethereal"),
        httpx.AsyncClient(transport=httpx.MockTransport(account_service))
    )
    app.dependency_overrides[get_mail_service] = lambda: service
    return service


# =============================================================================
# POST /api/summarize
# =============================================================================

class TestSummarizeEndpoint:
    """Integration tests for POST /api/summarize."""

    def test_decisions_summary_with_default_instruction(self, client, summarizer, fake_llm_client):
        fake_llm_client.chat.completions.create.return_value.choices[0].message.content = (
            "# Release Sync\n\n## Decisions\n- Ship on Friday\n\n## Action Items\n- Alice: release notes"
        )
        transcript = "We decided to ship Friday. Alice owns the release notes."

        response = client.post("/api/summarize", json={"transcript": transcript})

        assert response.status_code == 200, response.text
        summary = response.json()["summary"]
        assert summary and "Decisions" in summary

        fake_llm_client.chat.completions.create.assert_awaited_once()
        user_prompt = fake_llm_client.chat.completions.create.call_args.kwargs["messages"][1]["content"]
        assert user_prompt == f"Instruction: {DEFAULT_INSTRUCTION}\n\nTranscript:\n{transcript}"

    def test_empty_content_returns_empty_summary(self, client, summarizer, fake_llm_client):
        fake_llm_client.chat.completions.create.return_value.choices[0].message.content = None

        response = client.post("/api/summarize", json={"transcript": "hello", "instruction": "x"})

        assert response.status_code == 200
        assert response.json() == {"summary": ""}

    @pytest.mark.parametrize("body", [
        {"transcript": ""},
        {"transcript": "   \n\t"},
        {"instruction": "Summarize"},
        {},
    ])
    def test_invalid_transcript_rejected_without_upstream_call(
        self, client, summarizer, fake_llm_client, body
    ):
        response = client.post("/api/summarize", json=body)

        assert response.status_code == 400
        assert "transcript" in response.json()["error"]
        fake_llm_client.chat.completions.create.assert_not_called()

    def test_malformed_json_rejected(self, client, summarizer):
        response = client.post(
            "/api/summarize",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_upstream_failure_returns_error_body(self, client, summarizer, fake_llm_client):
        fake_llm_client.chat.completions.create.side_effect = APIConnectionError(
            request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
        )

        response = client.post("/api/summarize", json={"transcript": "hello"})

        assert response.status_code == 400
        assert response.json() == {"error": "Connection error."}


# =============================================================================
# POST /api/send-email
# =============================================================================

class TestSendEmailEndpoint:
    """Integration tests for POST /api/send-email."""

    def test_invalid_recipient_rejected_without_sending(self, client, mock_mail_service):
        response = client.post(
            "/api/send-email",
            json={"recipients": ["not-an-email"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 400
        assert "recipients" in response.json()["error"]
        mock_mail_service.send.assert_not_called()

    @pytest.mark.parametrize("body", [
        {"recipients": [], "html": "<p>Hi</p>"},
        {"recipients": ["alice@acme.io"], "html": ""},
        {"recipients": ["alice@acme.io"]},
        {"html": "<p>Hi</p>"},
    ])
    def test_incomplete_request_rejected(self, client, mock_mail_service, body):
        response = client.post("/api/send-email", json=body)

        assert response.status_code == 400
        assert response.json()["error"]
        mock_mail_service.send.assert_not_called()

    def test_html_only_message_gets_stripped_plain_text(
        self, client, ethereal_mail_service, smtp_send
    ):
        smtp_send.return_value = ({}, "250 Accepted [STATUS=new MSGID=Zm9vYmFy]")

        response = client.post(
            "/api/send-email",
            json={"recipients": ["alice@acme.io", "bob@acme.io"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["ok"] is True
        assert data["messageId"].startswith("<")
        assert data["previewUrl"] == "https://ethereal.email/message/Zm9vYmFy"

        message = smtp_send.call_args.args[0]
        assert message["Subject"] == "Meeting Summary"
        assert message["To"] == "alice@acme.io,bob@acme.io"
        assert message.get_body(preferencelist=("plain",)).get_content().strip() == "Hi"

    def test_preview_url_omitted_when_absent(self, client, ethereal_mail_service, smtp_send):
        smtp_send.return_value = ({}, "250 OK queued")

        response = client.post(
            "/api/send-email",
            json={"recipients": ["alice@acme.io"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 200
        assert "previewUrl" not in response.json()

    def test_smtp_failure_returns_error_body(self, client, ethereal_mail_service, smtp_send):
        smtp_send.side_effect = ConnectionRefusedError("Connection refused")

        response = client.post(
            "/api/send-email",
            json={"recipients": ["alice@acme.io"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Connection refused"}

    def test_undeliverable_unicode_recipient_returns_error_body(
        self, client, ethereal_mail_service, smtp_send
    ):
        smtp_send.side_effect = UnicodeEncodeError(
            "ascii", "ñoño@example.com", 0, 1, "ordinal not in range(128)"
        )

        response = client.post(
            "/api/send-email",
            json={"recipients": ["ñoño@example.com"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 400
        assert "ascii" in response.json()["error"]

    def test_missing_provider_credentials_returns_error_body(self, client):
        service = MailService(MailSettings(provider="gmail"), httpx.AsyncClient())
        app.dependency_overrides[get_mail_service] = lambda: service

        response = client.post(
            "/api/send-email",
            json={"recipients": ["alice@acme.io"], "html": "<p>Hi</p>"}
        )

        assert response.status_code == 400
        assert "GMAIL_USER" in response.json()["error"]


# =============================================================================
# Ambient endpoints and middleware
# =============================================================================

def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["mailProvider"] in ("gmail", "mailtrap", "ethereal")


def test_unknown_api_path_returns_json_404(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_oversized_body_rejected():
    small_app = create_app(Settings(llm_api_key="test-key", max_body_bytes=64))

    response = TestClient(small_app).post("/api/summarize", json={"transcript": "x" * 200})

    assert response.status_code == 413
    assert "too large" in response.json()["error"]


def test_oversized_chunked_body_rejected():
    small_app = create_app(Settings(llm_api_key="test-key", max_body_bytes=64))
    chunks = iter([b'{"transcript": "', b"x" * 200, b'"}'])

    response = TestClient(small_app).post(
        "/api/summarize",
        content=chunks,
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 413
    assert "too large" in response.json()["error"]


def test_chunked_body_within_limit_reaches_endpoint(client, summarizer):
    chunks = iter([b'{"transcript": ', b'"Alice: ship it"}'])

    response = client.post(
        "/api/summarize",
        content=chunks,
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 200, response.text
    assert response.json() == {"summary": "Summary text"}


def test_cors_allows_configured_origin():
    cors_app = create_app(Settings(llm_api_key="test-key", client_origin="http://localhost:5173"))

    response = TestClient(cors_app).options(
        "/api/summarize",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        }
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_http_clients_have_no_local_timeout():
    assert app.state.api_client.client.timeout == httpx.Timeout(None)
    assert app.state.mail_service.http_client.timeout == httpx.Timeout(None)


def test_invalid_request_error_returns_error_body(client):
    service = MagicMock()
    service.summarize = AsyncMock(side_effect=InvalidRequestError("transcript: too short"))
    app.dependency_overrides[get_summarizer_service] = lambda: service

    response = client.post("/api/summarize", json={"transcript": "hello"})

    assert response.status_code == 400
    assert response.json() == {"error": "transcript: too short"}


def test_validation_failure_is_reported_as_invalid_request(client, caplog):
    with caplog.at_level("WARNING"):
        response = client.post("/api/summarize", json={})

    assert response.status_code == 400
    assert "transcript" in response.json()["error"]
    assert "kind=InvalidRequestError" in caplog.text
