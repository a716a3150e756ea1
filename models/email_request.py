"""
Email Request/Response Models

Pydantic models for the POST /api/send-email endpoint. Field names on the
wire follow the browser client's camelCase (``messageId``, ``previewUrl``).
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

DEFAULT_SUBJECT = "Meeting Summary"


class EmailRequest(BaseModel):
    """
    Request body for the email endpoint.

    Attributes:
        recipients: One or more email addresses
        subject: Message subject (default: "Meeting Summary")
        html: HTML body (required, non-empty)
        text: Optional plain-text body; derived from html when absent
    """
    recipients: List[EmailStr] = Field(
        ...,
        min_length=1,
        description="Recipient email addresses"
    )
    subject: str = Field(
        default=DEFAULT_SUBJECT,
        description="Message subject"
    )
    html: str = Field(
        ...,
        min_length=1,
        description="HTML body"
    )
    text: Optional[str] = Field(
        default=None,
        description="Plain-text fallback body"
    )


class EmailResult(BaseModel):
    """Delivery receipt returned after a successful send."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    message_id: str = Field(..., alias="messageId")
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")
