"""Shared test setup.

The environment is configured before ``main`` is imported, since the app
validates its configuration at import time.
"""
import os

os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("MAIL_PROVIDER", "ethereal")

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def make_completion(content):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def fake_llm_client():
    """Mock AsyncOpenAI client with a configurable chat.completions.create."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion("Summary text"))
    return client


@pytest.fixture
def smtp_send():
    """Patch aiosmtplib.send as used by MailService.

    Yields the AsyncMock; it returns ``({}, reply)`` like a server that
    accepted every recipient. Set ``return_value`` to change the DATA reply.
    """
    with patch("services.mail_service.aiosmtplib.send", new_callable=AsyncMock) as send:
        send.return_value = ({}, "250 Accepted")
        yield send
