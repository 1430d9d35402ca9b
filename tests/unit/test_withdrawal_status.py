"""Tests for the withdrawal request workflow."""

import pytest

from app.models.enums import WITHDRAWAL_TRANSITIONS, WithdrawalStatus, can_transition


class TestWithdrawalTransitions:
    """pending -> approved | rejected, approved -> completed."""

    @pytest.mark.parametrize(
        "current, target",
        [
            ("pending", "approved"),
            ("pending", "rejected"),
            ("approved", "completed"),
        ],
    )
    def test_allowed(self, current, target) -> None:
        assert can_transition(current, target) is True

    @pytest.mark.parametrize(
        "current, target",
        [
            ("pending", "completed"),
            ("approved", "rejected"),
            ("approved", "pending"),
            ("rejected", "approved"),
            ("completed", "pending"),
            ("completed", "completed"),
        ],
    )
    def test_refused(self, current, target) -> None:
        assert can_transition(current, target) is False

    def test_unknown_status(self) -> None:
        assert can_transition("pending", "paid") is False
        assert can_transition("draft", "approved") is False

    def test_final_states_have_no_exits(self) -> None:
        assert WITHDRAWAL_TRANSITIONS[WithdrawalStatus.COMPLETED] == frozenset()
        assert WITHDRAWAL_TRANSITIONS[WithdrawalStatus.REJECTED] == frozenset()
