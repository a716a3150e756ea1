"""MailService for delivering summaries over SMTP.

The transport is resolved per send (see services.transport_resolver) and the
message is delivered with aiosmtplib.
"""
import logging
import re
from email.message import EmailMessage
from email.utils import make_msgid
from typing import List, Optional

import aiosmtplib
import httpx

from models.email_request import EmailRequest, EmailResult
from models.mail_transport import MailProviderKind, TransportConfig
from services.errors import UpstreamError
from services.transport_resolver import resolve_transport
from utils.settings import MailSettings
from utils.text_utils import strip_html_tags

logger = logging.getLogger(__name__)

_PREVIEW_MSGID = re.compile(r"MSGID=([^\s\]]+)")


class MailService:
    """Service for sending summary emails through the configured provider."""

    def __init__(self, settings: MailSettings, http_client: httpx.AsyncClient):
        """Initialize with mail settings and a shared HTTP client."""
        self.settings = settings
        self.http_client = http_client
        self.kind = MailProviderKind.from_name(settings.provider)

        if self.kind is MailProviderKind.ethereal:
            logger.warning(
                f"Mail provider '{settings.provider}' resolves to ethereal: "
                f"messages go to throwaway test mailboxes (development only)"
            )
        logger.info(f"MailService initialized: provider={self.kind.value}, from={settings.from_email}")

    async def send(self, request: EmailRequest) -> EmailResult:
        """
        Send one message to all recipients.

        Args:
            request: Validated EmailRequest

        Returns:
            EmailResult with message id, plus a preview URL for ethereal sends

        Raises:
            ConfigurationError: If the provider's credentials are missing
            UpstreamError: If provisioning or SMTP delivery fails
        """
        transport = await resolve_transport(self.kind, self.settings, self.http_client)
        message = self.build_message(request)
        recipients = list(request.recipients)

        logger.info(
            f"Sending email: provider={transport.kind.value}, host={transport.host}, "
            f"recipients={len(recipients)}, message_id={message['Message-ID']}"
        )

        try:
            reply = await self._deliver(transport, message, recipients)
        except (aiosmtplib.SMTPException, OSError, UnicodeError) as e:
            logger.error(
                f"Email delivery failed: provider={transport.kind.value}, error={e}",
                exc_info=True
            )
            raise UpstreamError(str(e) or "Failed to send email") from e

        preview_url = self.preview_url(transport, reply)
        logger.info(
            f"Email sent: message_id={message['Message-ID']}, "
            f"preview_url={preview_url or 'None'}"
        )
        return EmailResult(
            ok=True,
            message_id=message["Message-ID"],
            preview_url=preview_url
        )

    def build_message(self, request: EmailRequest) -> EmailMessage:
        """Build a multipart/alternative message with plain-text and HTML parts.

        The plain-text part is ``request.text`` when given, otherwise the HTML
        with its tags stripped.
        """
        text = request.text or strip_html_tags(request.html)

        message = EmailMessage()
        message["From"] = self.settings.from_email
        message["To"] = ",".join(request.recipients)
        message["Subject"] = request.subject
        message["Message-ID"] = make_msgid(domain=self._sender_domain())
        message.set_content(text)
        message.add_alternative(request.html, subtype="html")
        return message

    @staticmethod
    def preview_url(transport: TransportConfig, reply: str) -> Optional[str]:
        """Build the web preview link from the server's DATA reply (ethereal only)."""
        if transport.kind is not MailProviderKind.ethereal or not transport.preview_base:
            return None
        match = _PREVIEW_MSGID.search(reply or "")
        if not match:
            return None
        return f"{transport.preview_base}/message/{match.group(1)}"

    async def _deliver(
        self,
        transport: TransportConfig,
        message: EmailMessage,
        recipients: List[str]
    ) -> str:
        """Deliver the message and return the server's reply to DATA.

        Fails only when every recipient is refused.
        """
        refused, reply = await aiosmtplib.send(
            message,
            sender=self.settings.from_email,
            recipients=recipients,
            hostname=transport.host,
            port=transport.port,
            username=transport.credentials.user,
            password=transport.credentials.password,
            use_tls=transport.use_ssl,
            start_tls=not transport.use_ssl
        )
        if refused:
            logger.warning(f"Some recipients were refused: refused={list(refused)}")
        return reply

    def _sender_domain(self) -> str:
        _, _, domain = self.settings.from_email.rpartition("@")
        return domain or "summarizer.local"
