"""Tests for gateway status → order status mapping."""

import pytest

from src.bk_common.enums import OrderStatus
from src.bk_settlement.domain.mapping import map_gateway_status


class TestMapGatewayStatus:
    @pytest.mark.parametrize(
        ("transaction_status", "fraud_status", "expected"),
        [
            ("capture", "challenge", OrderStatus.CHALLENGE),
            ("capture", "accept", OrderStatus.LUNAS),
            ("settlement", None, OrderStatus.LUNAS),
            ("settlement", "accept", OrderStatus.LUNAS),
            ("cancel", None, OrderStatus.GAGAL),
            ("deny", "deny", OrderStatus.GAGAL),
            ("expire", None, OrderStatus.GAGAL),
            ("pending", None, OrderStatus.PENDING),
        ],
    )
    def test_table(self, transaction_status, fraud_status, expected) -> None:
        assert map_gateway_status(transaction_status, fraud_status) == expected

    @pytest.mark.parametrize(
        ("transaction_status", "fraud_status"),
        [
            ("capture", None),
            ("capture", "deny"),
            ("refund", None),
            ("authorize", None),
            (None, None),
            ("", None),
        ],
    )
    def test_unmapped_is_no_op(self, transaction_status, fraud_status) -> None:
        assert map_gateway_status(transaction_status, fraud_status) is None
