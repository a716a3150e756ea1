"""Data models for the meeting notes summarizer."""
from .summarize_request import SummarizeRequest, SummarizeResponse, DEFAULT_INSTRUCTION
from .email_request import EmailRequest, EmailResult, DEFAULT_SUBJECT
from .error_response import ErrorResponse
from .mail_transport import MailProviderKind, SmtpCredentials, TransportConfig
from .session_state import SessionState

__all__ = [
    # Summarization
    "SummarizeRequest",
    "SummarizeResponse",
    "DEFAULT_INSTRUCTION",
    # Email
    "EmailRequest",
    "EmailResult",
    "DEFAULT_SUBJECT",
    "ErrorResponse",
    # Mail transport
    "MailProviderKind",
    "SmtpCredentials",
    "TransportConfig",
    # UI
    "SessionState",
]
