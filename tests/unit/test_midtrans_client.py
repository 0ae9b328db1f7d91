"""Unit tests for MidtransGateway against an httpx.MockTransport."""

import base64
import json

import httpx
import pytest

from src.bk_common.errors import GatewayError, GatewayTimeoutError
from src.bk_payment.domain.models import GatewayCustomer
from src.bk_payment.infrastructure.midtrans import MidtransGateway, is_production_key, mask_key

SANDBOX_KEY = "SB-Mid-server-abcdefghijkl"


def _gateway(handler, key: str = SANDBOX_KEY, env: str = "sandbox") -> MidtransGateway:
    return MidtransGateway(key, env, timeout_seconds=1.0, transport=httpx.MockTransport(handler))


class TestKeyHandling:
    @pytest.mark.parametrize(
        ("key", "env", "expected"),
        [
            ("Mid-server-xyz", "sandbox", True),
            ("SB-Mid-server-xyz", "production", False),
            ("plain", "production", True),
            ("plain", "SANDBOX", False),
            ("", "sandbox", False),
        ],
    )
    def test_prefix_wins_over_env_flag(self, key: str, env: str, expected: bool) -> None:
        assert is_production_key(key, env) is expected

    def test_mask(self) -> None:
        assert mask_key("") == "MISSING"
        assert mask_key("short") == "*****"
        assert mask_key(SANDBOX_KEY) == "SB-Mi...hijkl"


class TestCreateSession:
    async def test_payload_and_auth(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"token": "tok", "redirect_url": "https://pay/tok"})

        gw = _gateway(handler)
        session = await gw.create_session(
            order_ref="TIKET-1",
            amount=130000,
            item_description="OperatorX Trip",
            customer=GatewayCustomer(name="Rina", email="rina@example.com"),
            item_id="1",
        )
        await gw.aclose()

        assert (session.token, session.redirect_url) == ("tok", "https://pay/tok")
        request = seen[0]
        assert str(request.url) == "https://app.sandbox.midtrans.com/snap/v1/transactions"
        expected_auth = base64.b64encode(f"{SANDBOX_KEY}:".encode()).decode()
        assert request.headers["Authorization"] == f"Basic {expected_auth}"
        body = json.loads(request.content)
        assert body["transaction_details"] == {"order_id": "TIKET-1", "gross_amount": 130000}
        assert body["customer_details"] == {"first_name": "Rina", "email": "rina@example.com"}
        assert body["item_details"] == [
            {"id": "1", "price": 130000, "quantity": 1, "name": "OperatorX Trip"}
        ]

    async def test_production_host(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"token": "t", "redirect_url": "u"})

        await _gateway(handler, key="Mid-server-abcdefghijkl").create_session(
            "TIKET-1", 1000, "Trip", GatewayCustomer("Rina", "rina@example.com")
        )
        assert seen[0].url.host == "app.midtrans.com"

    async def test_missing_token(self) -> None:
        gw = _gateway(lambda request: httpx.Response(201, json={"error_messages": ["bad"]}))
        with pytest.raises(GatewayError):
            await gw.create_session("TIKET-1", 1000, "Trip", GatewayCustomer("Rina", "r@x.id"))

    async def test_http_error(self) -> None:
        gw = _gateway(lambda request: httpx.Response(401, text="unauthorized"))
        with pytest.raises(GatewayError) as exc_info:
            await gw.create_session("TIKET-1", 1000, "Trip", GatewayCustomer("Rina", "r@x.id"))
        assert "401" in exc_info.value.message


class TestQueryStatus:
    async def test_status(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "order_id": "TIKET-1",
                    "transaction_status": "capture",
                    "fraud_status": "challenge",
                },
            )

        status = await _gateway(handler).query_status("TIKET-1")

        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://api.sandbox.midtrans.com/v2/TIKET-1/status"
        assert (status.transaction_status, status.fraud_status) == ("capture", "challenge")

    async def test_order_ref_stays_one_path_segment(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"transaction_status": "pending"})

        await _gateway(handler).query_status("../../v1/payment-links/abc?x=")

        url = seen[0].url
        assert url.host == "api.sandbox.midtrans.com"
        assert url.raw_path == b"/v2/..%2F..%2Fv1%2Fpayment-links%2Fabc%3Fx%3D/status"
        assert url.query == b""

    async def test_unknown_transaction(self) -> None:
        gw = _gateway(
            lambda request: httpx.Response(
                200,
                json={"status_code": "404", "status_message": "Transaction doesn't exist."},
            )
        )
        with pytest.raises(GatewayError) as exc_info:
            await gw.query_status("TIKET-404")
        assert "404" in exc_info.value.message

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(GatewayTimeoutError):
            await _gateway(handler).query_status("TIKET-1")

    async def test_server_error(self) -> None:
        with pytest.raises(GatewayError):
            await _gateway(lambda request: httpx.Response(500)).query_status("TIKET-1")

    async def test_non_json_body(self) -> None:
        with pytest.raises(GatewayError):
            await _gateway(lambda request: httpx.Response(200, text="<html>")).query_status(
                "TIKET-1"
            )
