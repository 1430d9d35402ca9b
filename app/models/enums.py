"""
Enums shared by models and services.
"""

from enum import StrEnum

from calculator.core.models import WithdrawalType


class WithdrawalStatus(StrEnum):
    """Withdrawal request workflow states."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class AccountStatus(StrEnum):
    """User investment account states."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    CLOSED = "closed"


# Allowed workflow transitions: pending -> approved|rejected -> completed
WITHDRAWAL_TRANSITIONS: dict[WithdrawalStatus, frozenset[WithdrawalStatus]] = {
    WithdrawalStatus.PENDING: frozenset(
        {WithdrawalStatus.APPROVED, WithdrawalStatus.REJECTED}
    ),
    WithdrawalStatus.APPROVED: frozenset({WithdrawalStatus.COMPLETED}),
    WithdrawalStatus.REJECTED: frozenset(),
    WithdrawalStatus.COMPLETED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    """
    Check whether a withdrawal request may move between two states.

    Args:
        current: Current status value
        target: Desired status value

    Returns:
        True if the transition is part of the workflow
    """
    try:
        current_status = WithdrawalStatus(current)
        target_status = WithdrawalStatus(target)
    except ValueError:
        return False
    return target_status in WITHDRAWAL_TRANSITIONS[current_status]


__all__ = [
    "AccountStatus",
    "WithdrawalStatus",
    "WithdrawalType",
    "WITHDRAWAL_TRANSITIONS",
    "can_transition",
]
