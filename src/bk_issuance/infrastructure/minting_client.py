"""Minting service client.

POST {base}/mint  {"recipients": [...], "token_uri": "..."}  → {"transaction_hash": "0x..."}

One attempt per call with a bounded timeout; every failure surfaces as
MintingError. Retrying is the caller's decision, and the pipeline never does.
"""
import logging
from typing import Any

import httpx

from src.bk_common.errors import MintingError

logger = logging.getLogger(__name__)


class MintingClient:
    """Concrete implementation of MinterProtocol."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["X-API-Key"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def mint(self, recipients: list[str], token_uri: str) -> str:
        if not recipients:
            raise MintingError("no recipients")
        payload: dict[str, Any] = {"recipients": recipients, "token_uri": token_uri}
        try:
            resp = await self._http().post("/mint", json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.TimeoutException as exc:
            raise MintingError(f"timed out after {self._timeout.read}s") from exc
        except httpx.HTTPStatusError as exc:
            raise MintingError(
                f"service returned {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise MintingError(str(exc) or type(exc).__name__) from exc

        tx_hash = body.get("transaction_hash") if isinstance(body, dict) else None
        if not tx_hash:
            raise MintingError("response carried no transaction hash")
        logger.info("Minted %d ticket(s) for %s: %s", len(recipients), token_uri, tx_hash)
        return str(tx_hash)
