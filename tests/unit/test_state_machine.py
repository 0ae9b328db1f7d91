"""Tests for the order lifecycle state machine."""

import pytest

from src.bk_common.enums import OrderStatus
from src.bk_order.domain.state_machine import (
    RECONCILABLE_STATUSES,
    can_transition,
    is_terminal,
    sources_for,
)


class TestCanTransition:
    @pytest.mark.parametrize(
        ("current", "target"),
        [
            ("PENDING", "CHALLENGE"),
            ("PENDING", "LUNAS"),
            ("PENDING", "GAGAL"),
            ("CHALLENGE", "LUNAS"),
            ("CHALLENGE", "GAGAL"),
            ("LUNAS", "MINTED"),
            ("LUNAS", "LUNAS_MINT_FAILED"),
        ],
    )
    def test_allowed(self, current: str, target: str) -> None:
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            ("LUNAS", "PENDING"),
            ("LUNAS", "GAGAL"),
            ("MINTED", "LUNAS"),
            ("GAGAL", "LUNAS"),
            ("CHALLENGE", "PENDING"),
            ("CANCEL", "PENDING"),
            ("PENDING", "MINTED"),
        ],
    )
    def test_forbidden(self, current: str, target: str) -> None:
        assert not can_transition(current, target)

    def test_unknown_status_is_never_allowed(self) -> None:
        assert not can_transition("REFUNDED", "LUNAS")


class TestSourcesFor:
    def test_lunas_from_pending_or_challenge(self) -> None:
        assert set(sources_for("LUNAS")) == {OrderStatus.PENDING, OrderStatus.CHALLENGE}

    def test_minted_only_from_lunas(self) -> None:
        assert sources_for("MINTED") == (OrderStatus.LUNAS,)

    def test_pending_has_no_sources(self) -> None:
        assert sources_for("PENDING") == ()


class TestTerminal:
    @pytest.mark.parametrize("status", ["GAGAL", "CANCEL", "MINTED", "LUNAS_MINT_FAILED"])
    def test_terminal(self, status: str) -> None:
        assert is_terminal(status)

    @pytest.mark.parametrize("status", ["PENDING", "CHALLENGE", "LUNAS"])
    def test_not_terminal(self, status: str) -> None:
        assert not is_terminal(status)

    def test_reconciler_never_moves_lunas(self) -> None:
        assert OrderStatus.LUNAS not in RECONCILABLE_STATUSES
