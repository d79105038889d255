"""SMTP delivery of invitation e-mails via aiosmtplib."""

import logging
from email.message import EmailMessage

import aiosmtplib

from app.config import Settings

logger = logging.getLogger(__name__)


class MailerNotConfiguredError(RuntimeError):
    """Raised when sending is attempted without SMTP settings."""


class InvitationMailer:
    """Sends rendered invitation messages through one SMTP server.

    Port 465 uses implicit TLS; other ports upgrade with STARTTLS when the
    server offers it. Sending is not retried.
    """

    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        username: str = "",
        password: str = "",
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.from_address = from_address
        self.username = username
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "InvitationMailer":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            from_address=settings.smtp_from_email,
            username=settings.smtp_user,
            password=settings.smtp_password,
            timeout=settings.smtp_timeout,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.port and self.from_address)

    async def send(self, message: EmailMessage) -> None:
        if not self.is_configured:
            raise MailerNotConfiguredError("SMTP is not configured")

        await aiosmtplib.send(
            message,
            hostname=self.host,
            port=self.port,
            username=self.username or None,
            password=self.password or None,
            use_tls=self.port == 465,
            timeout=self.timeout,
        )
        logger.info("Sent e-mail %r to %s", message["Subject"], message["To"])
