"""Midtrans client — Snap session creation and Core API status queries.

- POST {snap}/snap/v1/transactions   → {token, redirect_url}
- GET  {api}/v2/{order_id}/status    → {transaction_status, fraud_status, ...}

Both calls authenticate with HTTP Basic (server key as username, empty
password) and run with a bounded timeout. Errors surface as GatewayError /
GatewayTimeoutError; nothing here touches order state.
"""
import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.bk_common.errors import GatewayError, GatewayTimeoutError
from src.bk_payment.domain.models import GatewayCustomer, GatewaySession, GatewayStatus

logger = logging.getLogger(__name__)

_SANDBOX_SNAP_URL = "https://app.sandbox.midtrans.com"
_SANDBOX_API_URL = "https://api.sandbox.midtrans.com"
_PRODUCTION_SNAP_URL = "https://app.midtrans.com"
_PRODUCTION_API_URL = "https://api.midtrans.com"


def is_production_key(server_key: str, env_flag: str) -> bool:
    """Key prefix wins over the env flag: 'Mid-' is production, 'SB-' is sandbox."""
    if server_key.startswith("Mid-"):
        return True
    if server_key.startswith("SB-"):
        return False
    return env_flag.lower() == "production"


def mask_key(server_key: str) -> str:
    if len(server_key) <= 10:
        return "MISSING" if not server_key else "*****"
    return f"{server_key[:5]}...{server_key[-5:]}"


class MidtransGateway:
    """Concrete implementation of PaymentGatewayProtocol."""

    def __init__(
        self,
        server_key: str,
        env_flag: str = "sandbox",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._server_key = server_key
        self.is_production = is_production_key(server_key, env_flag)
        self._snap_url = _PRODUCTION_SNAP_URL if self.is_production else _SANDBOX_SNAP_URL
        self._api_url = _PRODUCTION_API_URL if self.is_production else _SANDBOX_API_URL
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not server_key:
            logger.error("MIDTRANS_SERVER_KEY is not configured")
        logger.info(
            "Midtrans configured: mode=%s key=%s",
            "PRODUCTION" if self.is_production else "SANDBOX",
            mask_key(server_key),
        )

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                auth=httpx.BasicAuth(self._server_key, ""),
                headers={"Accept": "application/json", "Content-Type": "application/json"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def create_session(
        self,
        order_ref: str,
        amount: int,
        item_description: str,
        customer: GatewayCustomer,
        item_id: str | None = None,
    ) -> GatewaySession:
        payload: dict[str, Any] = {
            "transaction_details": {"order_id": order_ref, "gross_amount": amount},
            "credit_card": {"secure": True},
            "customer_details": {
                "first_name": customer.name,
                "email": customer.email,
            },
            "item_details": [
                {
                    "id": item_id or order_ref,
                    "price": amount,
                    "quantity": 1,
                    "name": item_description[:50],
                }
            ],
        }
        if customer.phone:
            payload["customer_details"]["phone"] = customer.phone

        body = await self._request("POST", f"{self._snap_url}/snap/v1/transactions", "create_session", payload)
        token = body.get("token")
        redirect_url = body.get("redirect_url")
        if not token or not redirect_url:
            raise GatewayError(f"session response missing token for {order_ref}")
        logger.info("Gateway session created for %s", order_ref)
        return GatewaySession(token=token, redirect_url=redirect_url)

    async def query_status(self, order_ref: str) -> GatewayStatus:
        # The reference is a single path segment and must not escape /v2/.
        url = f"{self._api_url}/v2/{quote(order_ref, safe='')}/status"
        body = await self._request("GET", url, "query_status")
        # Core API answers HTTP 200 with status_code "404" for unknown transactions.
        if not body.get("transaction_status"):
            raise GatewayError(
                f"status query for {order_ref} returned {body.get('status_code', '?')}: "
                f"{body.get('status_message', 'no transaction status')}"
            )
        return GatewayStatus(
            order_ref=body.get("order_id") or order_ref,
            transaction_status=body.get("transaction_status"),
            fraud_status=body.get("fraud_status"),
        )

    async def _request(
        self,
        method: str,
        url: str,
        operation: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._http().request(method, url, json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.TimeoutException as exc:
            logger.warning("Midtrans %s timed out: %s", operation, exc)
            raise GatewayTimeoutError(operation) from exc
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:300]
            logger.error("Midtrans %s failed (%d): %s", operation, exc.response.status_code, detail)
            raise GatewayError(f"{operation} returned {exc.response.status_code}: {detail}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Midtrans %s failed: %s", operation, exc)
            raise GatewayError(f"{operation} failed: {exc}") from exc
        if not isinstance(body, dict):
            raise GatewayError(f"{operation} returned a non-object body")
        return body
