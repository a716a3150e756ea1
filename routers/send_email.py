"""
Email router.

POST /api/send-email delivers an HTML summary to a list of recipients through
the configured mail provider.
"""

import logging
from fastapi import APIRouter, Depends, Request

from models.email_request import EmailRequest, EmailResult
from models.error_response import ErrorResponse
from services.mail_service import MailService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["email"])


def get_mail_service(request: Request) -> MailService:
    """Return the MailService created at application startup."""
    return request.app.state.mail_service


@router.post(
    "/send-email",
    response_model=EmailResult,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}}
)
async def send_email(
    body: EmailRequest,
    service: MailService = Depends(get_mail_service)
):
    """
    Send the summary email.

    Returns:
        EmailResult as {"ok": true, "messageId": ..., "previewUrl": ...};
        previewUrl is omitted outside the ethereal development provider
    """
    logger.info(f"Send-email request: recipients={len(body.recipients)}, html_length={len(body.html)}")
    return await service.send(body)
