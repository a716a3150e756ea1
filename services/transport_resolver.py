"""Transport resolver for the email proxy.

Maps the configured mail provider to SMTP connection parameters:

- gmail: Gmail SMTP over implicit TLS with an account/app-password pair
- mailtrap: Mailtrap sandbox relay over STARTTLS
- ethereal: a throwaway test mailbox provisioned on every call (development only)
"""
import logging
from typing import Optional

import httpx

from models.mail_transport import MailProviderKind, SmtpCredentials, TransportConfig
from services.errors import ConfigurationError, UpstreamError
from utils.settings import MailSettings

logger = logging.getLogger(__name__)

GMAIL_HOST = "smtp.gmail.com"
GMAIL_PORT = 465

MAILTRAP_HOST = "smtp.mailtrap.io"
MAILTRAP_PORT = 587

ETHEREAL_HOST = "smtp.ethereal.email"
ETHEREAL_PORT = 587
ETHEREAL_ACCOUNT_URL = "https://api.nodemailer.com/user"
ETHEREAL_WEB_URL = "https://ethereal.email"
ETHEREAL_REQUESTOR = "meeting-notes-summarizer"


async def resolve_transport(
    kind: MailProviderKind,
    settings: MailSettings,
    http_client: httpx.AsyncClient
) -> TransportConfig:
    """
    Build the transport for one send.

    Args:
        kind: Provider resolved from the configured name
        settings: Mail settings holding provider credentials
        http_client: Client used to provision ethereal test accounts

    Returns:
        TransportConfig ready for SMTP delivery

    Raises:
        ConfigurationError: If gmail/mailtrap credentials are not configured
        UpstreamError: If a throwaway mailbox cannot be provisioned
    """
    if kind is MailProviderKind.gmail:
        return TransportConfig(
            kind=kind,
            host=GMAIL_HOST,
            port=GMAIL_PORT,
            use_ssl=True,
            credentials=_require_credentials(
                settings.gmail_user, settings.gmail_app_password,
                "GMAIL_USER", "GMAIL_APP_PASSWORD"
            )
        )

    if kind is MailProviderKind.mailtrap:
        return TransportConfig(
            kind=kind,
            host=MAILTRAP_HOST,
            port=MAILTRAP_PORT,
            use_ssl=False,
            credentials=_require_credentials(
                settings.mailtrap_user, settings.mailtrap_pass,
                "MAILTRAP_USER", "MAILTRAP_PASS"
            )
        )

    credentials = await create_test_account(http_client)
    return TransportConfig(
        kind=MailProviderKind.ethereal,
        host=ETHEREAL_HOST,
        port=ETHEREAL_PORT,
        use_ssl=False,
        credentials=credentials,
        preview_base=ETHEREAL_WEB_URL
    )


async def create_test_account(http_client: httpx.AsyncClient) -> SmtpCredentials:
    """
    Provision a disposable ethereal mailbox.

    Every call creates a new account, so credentials differ between calls.

    Raises:
        UpstreamError: If the account service is unreachable or refuses
    """
    logger.info("Provisioning ethereal test account")
    try:
        response = await http_client.post(
            ETHEREAL_ACCOUNT_URL,
            json={"requestor": ETHEREAL_REQUESTOR, "version": "1.0.0"}
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Ethereal account provisioning failed: error={e}")
        raise UpstreamError(f"Failed to create test account: {e}") from e

    if data.get("status") != "success" or not data.get("user") or not data.get("pass"):
        message = data.get("error") or "Failed to create test account"
        logger.error(f"Ethereal account service refused: error={message}")
        raise UpstreamError(message)

    logger.info(f"Ethereal test account ready: user={data['user']}")
    return SmtpCredentials(user=data["user"], password=data["pass"])


def _require_credentials(
    user: Optional[str],
    password: Optional[str],
    user_var: str,
    password_var: str
) -> SmtpCredentials:
    if not user or not password:
        raise ConfigurationError(
            f"{user_var} and {password_var} must be set to send mail with this provider"
        )
    return SmtpCredentials(user=user, password=password)
