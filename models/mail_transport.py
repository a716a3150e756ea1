"""
Mail Transport Models

Typed description of the SMTP transport used for one send. The provider is a
tagged variant (MailProviderKind) and each variant carries its own
credentials in a TransportConfig.
"""

import enum
from dataclasses import dataclass
from typing import Optional


class MailProviderKind(str, enum.Enum):
    """Supported mail providers.

    ``ethereal`` is the development variant: a throwaway test mailbox is
    provisioned for every send and messages are only viewable via a preview URL.
    """
    gmail = "gmail"
    mailtrap = "mailtrap"
    ethereal = "ethereal"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "MailProviderKind":
        """Map a configured provider name to a kind.

        Matching is case-insensitive; unset or unknown names map to ethereal.
        """
        normalized = (name or "").strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        return cls.ethereal


@dataclass(frozen=True)
class SmtpCredentials:
    """Username/password pair for SMTP AUTH."""
    user: str
    password: str


@dataclass(frozen=True)
class TransportConfig:
    """
    Connection parameters for one SMTP transport.

    Attributes:
        kind: Provider this transport was resolved for
        host: SMTP server hostname
        port: SMTP server port
        use_ssl: True for implicit TLS (SMTPS), False for STARTTLS
        credentials: Login credentials
        preview_base: Web base for message previews (ethereal only)
    """
    kind: MailProviderKind
    host: str
    port: int
    use_ssl: bool
    credentials: SmtpCredentials
    preview_base: Optional[str] = None
