"""
Type definitions for calculator module.

TypedDict shapes handed to presentation code.
"""

from typing import TypedDict


class FeeBreakdownDict(TypedDict):
    """
    Serialized fee breakdown.

    Amounts are decimal strings so that no float rounding is introduced
    on the way to the client.

    Attributes:
        requested_amount: Gross amount requested
        processing_fee: Processing fee charged on every withdrawal
        penalty_amount: Early withdrawal penalty (emergency only)
        net_amount: Amount paid out after fees
        withdrawal_type: partial, full or emergency
        is_eligible: Whether the account was inside its withdrawal window
    """
    requested_amount: str
    processing_fee: str
    penalty_amount: str
    net_amount: str
    withdrawal_type: str
    is_eligible: bool


class EligibilityDict(TypedDict):
    """
    Serialized eligibility status of an account.

    Attributes:
        is_eligible: True if a regular withdrawal is allowed now
        days_until_eligible: Whole days left, 0 when eligible
        next_eligible_withdrawal: ISO timestamp or None
    """
    is_eligible: bool
    days_until_eligible: int
    next_eligible_withdrawal: str | None
