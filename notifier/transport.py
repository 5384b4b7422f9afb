import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Protocol

from .config import config

# Setup logger
logger = logging.getLogger(__name__)


class EmailTransport(Protocol):
    def deliver(self, to_address: str, subject: str, html: str, text: str) -> bool:
        ...


class ConsoleTransport:
    """
    Logs the email instead of sending it.

    Default transport for local development; swap in SmtpTransport
    (EMAIL_TRANSPORT=smtp) to actually deliver mail.
    """

    def deliver(self, to_address: str, subject: str, html: str, text: str) -> bool:
        divider = "=" * 80
        logger.info(
            f"\n{divider}\n📧 EMAIL NOTIFICATION\n{divider}\n"
            f"To: {to_address}\nSubject: {subject}\n\n--- Text Version ---\n{text}\n{divider}"
        )
        return True


class SmtpTransport:
    """Sends multipart (text + HTML) email over SMTP with STARTTLS."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        from_address: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.host = host or config.SMTP_HOST
        self.port = port or config.SMTP_PORT
        self.user = user or config.SMTP_USER
        self.password = password or config.SMTP_PASSWORD
        self.from_address = from_address or config.SMTP_FROM
        self.timeout = timeout or config.SMTP_TIMEOUT

    def _build_message(self, to_address: str, subject: str, html: str, text: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"Deadline Guardian <{self.from_address}>"
        msg["To"] = to_address
        msg.attach(MIMEText(text, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def deliver(self, to_address: str, subject: str, html: str, text: str) -> bool:
        # Validation
        if not (self.host and self.from_address and to_address):
            logger.error("Missing SMTP configuration or recipient")
            return False

        msg = self._build_message(to_address, subject, html, text)
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.sendmail(self.from_address, [to_address], msg.as_string())
        logger.info(f"SMTP delivered '{subject}' to {to_address}")
        return True


def build_transport(kind: Optional[str] = None) -> EmailTransport:
    kind = (kind or config.EMAIL_TRANSPORT).lower()
    if kind == "smtp":
        return SmtpTransport()
    if kind == "console":
        return ConsoleTransport()
    raise ValueError(f"Unknown EMAIL_TRANSPORT: {kind!r}")
