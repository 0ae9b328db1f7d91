"""SMTP notifier. smtplib is blocking, so delivery runs in a worker thread."""
import asyncio
import logging
import smtplib
from email.message import EmailMessage

from src.bk_common.errors import NotificationError

logger = logging.getLogger(__name__)


class SmtpNotifier:
    """Concrete implementation of NotifierProtocol."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        sender: str = "",
        timeout_seconds: float = 30.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._sender = sender or username
        self._timeout = timeout_seconds

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self._sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("Your e-ticket is in the HTML part of this message.")
        msg.add_alternative(html, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(msg)

    async def send(self, to: str, subject: str, html: str) -> None:
        if not self._host:
            raise NotificationError("SMTP_HOST is not configured")
        msg = self._build_message(to, subject, html)
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(str(exc) or type(exc).__name__) from exc
        logger.info("E-mail '%s' delivered to %s", subject, to)
