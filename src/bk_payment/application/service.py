# src/bk_payment/application/service.py
from config.settings import settings
from src.bk_payment.infrastructure.midtrans import MidtransGateway

_gateway: MidtransGateway | None = None


def get_payment_gateway() -> MidtransGateway:
    global _gateway  # noqa: PLW0603
    if _gateway is None:
        _gateway = MidtransGateway(
            server_key=settings.MIDTRANS_SERVER_KEY,
            env_flag=settings.MIDTRANS_ENV,
            timeout_seconds=settings.GATEWAY_TIMEOUT_SECONDS,
        )
    return _gateway


async def close_payment_gateway() -> None:
    global _gateway  # noqa: PLW0603
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None
