"""Unit tests for SmtpNotifier with smtplib.SMTP replaced."""
import smtplib

import pytest

from src.bk_common.errors import NotificationError
from src.bk_issuance.infrastructure import mailer
from src.bk_issuance.infrastructure.mailer import SmtpNotifier


class _RecordingSMTP:
    instances: list["_RecordingSMTP"] = []

    def __init__(self, host: str, port: int, timeout: float) -> None:
        self.host = host
        self.port = port
        self.calls: list[str] = []
        self.sent = []
        _RecordingSMTP.instances.append(self)

    def __enter__(self) -> "_RecordingSMTP":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def starttls(self) -> None:
        self.calls.append("starttls")

    def login(self, username: str, password: str) -> None:
        self.calls.append(f"login:{username}")

    def send_message(self, msg) -> None:
        self.sent.append(msg)


class _RefusingSMTP(_RecordingSMTP):
    def login(self, username: str, password: str) -> None:
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")


@pytest.fixture(autouse=True)
def _reset() -> None:
    _RecordingSMTP.instances.clear()


async def test_send_delivers_html(monkeypatch) -> None:
    monkeypatch.setattr(mailer.smtplib, "SMTP", _RecordingSMTP)
    notifier = SmtpNotifier(
        "smtp.test", 2525, "bot@naikajaa.id", "pw", sender="NaikAjaa <bot@naikajaa.id>"
    )

    await notifier.send("rina@example.com", "E-Ticket issued: T-1", "<p>ticket</p>")

    smtp = _RecordingSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.test", 2525)
    assert smtp.calls == ["starttls", "login:bot@naikajaa.id"]
    msg = smtp.sent[0]
    assert msg["To"] == "rina@example.com"
    assert msg["Subject"] == "E-Ticket issued: T-1"
    assert msg["From"] == "NaikAjaa <bot@naikajaa.id>"
    assert "<p>ticket</p>" in msg.get_body(preferencelist=("html",)).get_content()


async def test_no_tls_no_login(monkeypatch) -> None:
    monkeypatch.setattr(mailer.smtplib, "SMTP", _RecordingSMTP)
    await SmtpNotifier("smtp.test", use_tls=False).send("rina@example.com", "s", "<p/>")
    assert _RecordingSMTP.instances[0].calls == []


async def test_missing_host() -> None:
    with pytest.raises(NotificationError):
        await SmtpNotifier("").send("rina@example.com", "s", "<p/>")


async def test_smtp_failure_becomes_notification_error(monkeypatch) -> None:
    monkeypatch.setattr(mailer.smtplib, "SMTP", _RefusingSMTP)
    with pytest.raises(NotificationError):
        await SmtpNotifier("smtp.test", username="bot").send("rina@example.com", "s", "<p/>")
