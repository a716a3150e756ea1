"""
Application Settings

This module builds the runtime configuration from environment variables.
``main.py`` calls ``load_dotenv()`` first, so values from a local ``.env``
file are picked up as well.

Only ``GROQ_API_KEY`` is mandatory; every other variable has a default.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional

from services.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.1-70b-versatile"
DEFAULT_LLM_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_CLIENT_ORIGIN = "http://localhost:5173"
DEFAULT_MAIL_PROVIDER = "ethereal"
DEFAULT_FROM_EMAIL = "no-reply@summarizer.local"
DEFAULT_PORT = 4000
DEFAULT_STATIC_DIR = "dist"
DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024  # 2MB


@dataclass
class MailSettings:
    """
    Mail transport configuration.

    Attributes:
        provider: Provider name as configured (``gmail``, ``mailtrap``, anything else)
        from_email: Sender address used for every message
        gmail_user: Gmail account address
        gmail_app_password: Gmail app password
        mailtrap_user: Mailtrap sandbox username
        mailtrap_pass: Mailtrap sandbox password
    """
    provider: str = DEFAULT_MAIL_PROVIDER
    from_email: str = DEFAULT_FROM_EMAIL
    gmail_user: Optional[str] = None
    gmail_app_password: Optional[str] = None
    mailtrap_user: Optional[str] = None
    mailtrap_pass: Optional[str] = None


@dataclass
class Settings:
    """
    Runtime configuration for the summarizer service.

    Attributes:
        llm_api_key: API key for the LLM provider (required)
        llm_base_url: OpenAI-compatible endpoint of the LLM provider
        model: Chat model identifier
        client_origin: Browser origin allowed by CORS
        port: Listening port
        api_base: Base URL the form page uses to reach the API
        static_dir: Directory holding a prebuilt frontend bundle
        max_body_bytes: Largest accepted request body
        mail: Mail transport configuration
    """
    llm_api_key: str
    llm_base_url: str = DEFAULT_LLM_BASE_URL
    model: str = DEFAULT_MODEL
    client_origin: str = DEFAULT_CLIENT_ORIGIN
    port: int = DEFAULT_PORT
    api_base: Optional[str] = None
    static_dir: str = DEFAULT_STATIC_DIR
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    mail: MailSettings = field(default_factory=MailSettings)

    def __post_init__(self):
        if not self.api_base:
            self.api_base = f"http://127.0.0.1:{self.port}"


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Returns:
        Settings populated from the environment with defaults applied

    Raises:
        ConfigurationError: If GROQ_API_KEY is missing or a numeric
            variable cannot be parsed
    """
    api_key = os.getenv("GROQ_API_KEY")
    if not api_key:
        raise ConfigurationError(
            "Missing GROQ_API_KEY - set it in your environment variables."
        )

    mail = MailSettings(
        provider=os.getenv("MAIL_PROVIDER", DEFAULT_MAIL_PROVIDER),
        from_email=os.getenv("FROM_EMAIL") or DEFAULT_FROM_EMAIL,
        gmail_user=os.getenv("GMAIL_USER"),
        gmail_app_password=os.getenv("GMAIL_APP_PASSWORD"),
        mailtrap_user=os.getenv("MAILTRAP_USER"),
        mailtrap_pass=os.getenv("MAILTRAP_PASS"),
    )

    return Settings(
        llm_api_key=api_key,
        llm_base_url=os.getenv("LLM_BASE_URL", DEFAULT_LLM_BASE_URL),
        model=os.getenv("MODEL") or DEFAULT_MODEL,
        client_origin=os.getenv("CLIENT_ORIGIN", DEFAULT_CLIENT_ORIGIN),
        port=_int_from_env("PORT", DEFAULT_PORT),
        api_base=os.getenv("API_BASE"),
        static_dir=os.getenv("STATIC_DIR", DEFAULT_STATIC_DIR),
        max_body_bytes=_int_from_env("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
        mail=mail,
    )


def _int_from_env(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to ``default`` when unset."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
