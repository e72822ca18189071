"""
mailer.py — Outbound mail transports
SMTP for real delivery, a logging transport for local development, and an
in-memory outbox for tests that need to read the codes we send.
"""

import logging
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage

from config import SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD, MAIL_FROM

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when a transport could not hand the message over."""


@dataclass
class MailMessage:
    to: str
    subject: str
    html: str
    sender: str = MAIL_FROM
    # Template values (e.g. the one-time token) kept alongside the rendered body
    context: dict = field(default_factory=dict)


class SMTPTransport:
    def __init__(self, host: str, port: int, username: str = "", password: str = "", timeout: int = 10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    def send(self, message: MailMessage):
        email = EmailMessage()
        email["From"] = message.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email.set_content(message.html, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.username:
                    client.starttls()
                    client.login(self.username, self.password)
                client.send_message(email)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(str(e)) from e
        logger.info(f"Email '{message.subject}' sent to {message.to}")


class ConsoleTransport:
    """Logs messages instead of delivering them."""

    def send(self, message: MailMessage):
        logger.info(f"[mail] to={message.to} subject={message.subject!r}\n{message.html}")


class MemoryTransport:
    def __init__(self):
        self.outbox: list[MailMessage] = []

    def send(self, message: MailMessage):
        self.outbox.append(message)

    @property
    def last(self) -> MailMessage | None:
        return self.outbox[-1] if self.outbox else None


def get_mail_transport():
    """FastAPI dependency — SMTP when configured, otherwise the console."""
    if SMTP_HOST:
        return SMTPTransport(SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD)
    return ConsoleTransport()
