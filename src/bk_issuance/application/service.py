# src/bk_issuance/application/service.py
"""Process-wide minting and notification clients, created on first use."""
from config.settings import settings
from src.bk_issuance.infrastructure.mailer import SmtpNotifier
from src.bk_issuance.infrastructure.minting_client import MintingClient

_minting_client: MintingClient | None = None
_notifier: SmtpNotifier | None = None


def get_minting_client() -> MintingClient:
    global _minting_client  # noqa: PLW0603
    if _minting_client is None:
        _minting_client = MintingClient(
            base_url=settings.MINTING_SERVICE_URL,
            api_key=settings.MINTING_API_KEY,
            timeout_seconds=settings.MINTING_TIMEOUT_SECONDS,
        )
    return _minting_client


def get_notifier() -> SmtpNotifier:
    global _notifier  # noqa: PLW0603
    if _notifier is None:
        _notifier = SmtpNotifier(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            sender=settings.MAIL_FROM,
        )
    return _notifier


async def close_issuance_clients() -> None:
    global _minting_client, _notifier  # noqa: PLW0603
    if _minting_client is not None:
        await _minting_client.aclose()
        _minting_client = None
    _notifier = None
